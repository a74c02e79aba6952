"""
Settings Manager for Nekifoch.

Stores the tool's own preferences (kitty config location, matching policy,
command timeout, logging) as JSON with dot notation access. The kitty
config itself is handled by KittyConfigStore, never by this class.
"""

import copy
import json
import logging
from typing import Any, Callable, Dict, List, Optional
from pathlib import Path

from ...utils.config_paths import get_configs_dir

logger = logging.getLogger("nekifoch.settings")


class SettingsManager:
    """
    Manages Nekifoch preferences.

    Features:
    - Dot notation access (settings.get('fonts.match_policy'))
    - Loaded values validated against DEFAULT_SETTINGS types
    - Change callbacks for dependent caches
    """

    DEFAULT_SETTINGS = {
        'kitty': {
            'conf_path': '',            # Empty: ~/.config/kitty/kitty.conf (or KITTY_CONFIG_DIRECTORY)
            'process_name': 'kitty',    # Processes signalled after a write
            'reload_signal': 'SIGUSR1'  # kitty re-reads its config on SIGUSR1
        },
        'fonts': {
            'match_policy': 'normalized',   # exact, normalized, substring
            'installed_source': 'fc-list'   # fc-list or qt
        },
        'commands': {
            'timeout': 10.0  # Seconds before an external font command is abandoned
        },
        'app': {
            'log_level': 'INFO',
            'log_retention_days': 10
        }
    }

    def __init__(self, settings_file: Optional[Path] = None):
        if settings_file is None:
            settings_file = get_configs_dir() / "settings.json"
        self.settings_file = Path(settings_file)
        self.settings_dir = self.settings_file.parent

        self._settings: Dict[str, Any] = {}
        self._change_callbacks: List[Callable[[str], None]] = []

        self.load()

    # --- Observer pattern for settings changes ------------------------------------

    def on_change(self, callback: Callable[[str], None]) -> None:
        """Register a callback to be notified when settings change.

        Args:
            callback: Callable accepting one argument (the dot-notation key that changed).
        """
        if callback not in self._change_callbacks:
            self._change_callbacks.append(callback)

    def remove_change_callback(self, callback: Callable[[str], None]) -> None:
        """Remove a previously registered change callback."""
        try:
            self._change_callbacks.remove(callback)
        except ValueError:
            pass

    def _notify_change(self, key_path: str) -> None:
        for cb in self._change_callbacks:
            try:
                cb(key_path)
            except Exception as e:
                logger.warning(f"Settings change callback error for key '{key_path}': {e}")

    # --- Load / save ----------------------------------------------------------------

    def _get_nested_dict(self, data: Dict, path: str, create_missing: bool = False) -> tuple:
        """Navigate nested dictionary structure using dot notation."""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                if create_missing:
                    current[key] = {}
                else:
                    return None, keys[-1]
            current = current[key]

        return current, keys[-1]

    def _validate_and_merge_settings(self, loaded_settings: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and merge loaded settings with defaults.

        Only keys that exist in DEFAULT_SETTINGS are kept, values of the wrong
        type fall back to the default and missing keys are filled in.
        """

        def validate_value(value, default_value, key_path):
            expected_type = type(default_value)

            # Allow int where float expected
            if expected_type == float and isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
            elif expected_type == int and isinstance(value, int) and not isinstance(value, bool):
                return value
            elif isinstance(value, expected_type) and not isinstance(value, bool):
                return value
            else:
                logger.warning(
                    f"Invalid type for '{key_path}': expected {expected_type.__name__}, "
                    f"got {type(value).__name__}. Using default: {default_value}"
                )
                return default_value

        def merge_dict(loaded_dict, default_dict, path=""):
            result = {}

            for key, default_value in default_dict.items():
                current_path = f"{path}.{key}" if path else key

                if key not in loaded_dict:
                    result[key] = copy.deepcopy(default_value)
                elif isinstance(default_value, dict):
                    loaded_value = loaded_dict[key]
                    if isinstance(loaded_value, dict):
                        result[key] = merge_dict(loaded_value, default_value, current_path)
                    else:
                        logger.warning(f"Invalid type for '{current_path}': expected dict. Using default")
                        result[key] = copy.deepcopy(default_value)
                else:
                    result[key] = validate_value(loaded_dict[key], default_value, current_path)

            for key in loaded_dict.keys():
                if key not in default_dict:
                    current_path = f"{path}.{key}" if path else key
                    logger.debug(f"Ignoring unknown key from config file: {current_path}")

            return result

        return merge_dict(loaded_settings, self.DEFAULT_SETTINGS)

    def load(self):
        """Load settings from file, falling back to defaults."""
        try:
            if self.settings_file.exists():
                with open(self.settings_file, 'r', encoding='utf-8') as f:
                    loaded_settings = json.load(f)
                if not isinstance(loaded_settings, dict):
                    raise ValueError("settings root must be an object")
                self._settings = self._validate_and_merge_settings(loaded_settings)
                logger.debug(f"Settings loaded from {self.settings_file}")
            else:
                self._settings = copy.deepcopy(self.DEFAULT_SETTINGS)
                logger.debug("No settings file, using defaults")
        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"Invalid settings file {self.settings_file}: {e}. Using defaults.")
            self._settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        except OSError as e:
            logger.error(f"Failed to load settings: {e}")
            self._settings = copy.deepcopy(self.DEFAULT_SETTINGS)

    def save(self):
        """Save all current settings to file."""
        try:
            self.settings_dir.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self._settings, f, indent=2, ensure_ascii=False)
            logger.debug(f"Settings saved to {self.settings_file}")
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")

    # --- Access ---------------------------------------------------------------------

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get setting value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., 'fonts.match_policy')
            default: Default value if key doesn't exist
        """
        parent_dict, final_key = self._get_nested_dict(self._settings, key_path)
        if parent_dict is None or final_key not in parent_dict:
            return default
        return parent_dict[final_key]

    def set(self, key_path: str, value: Any):
        """Set setting value using dot notation and persist it."""
        parent_dict, final_key = self._get_nested_dict(self._settings, key_path, create_missing=True)
        parent_dict[final_key] = value
        self.save()
        logger.debug(f"Setting '{key_path}' updated")
        self._notify_change(key_path)

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._settings)

    def reset_to_defaults(self):
        """Reset all settings to defaults."""
        self._settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.save()
        logger.info("Settings reset to defaults")


_settings: Optional[SettingsManager] = None


def get_settings() -> SettingsManager:
    """Process-wide settings instance, created on first use."""
    global _settings
    if _settings is None:
        _settings = SettingsManager()
    return _settings
