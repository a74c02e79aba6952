"""
Config Service for Nekifoch.

Combines the kitty config store, font enumeration and font matching into
the user-facing operations: check, set font, set size and list fonts.
Every successful write is followed by a best-effort reload signal to the
running terminal.
"""

import re
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..domain.errors import InvalidInputError, NotFoundError
from ..domain.models.font_models import (
    FONT_FAMILY,
    FONT_SIZE,
    CompatibleFontIndex,
    CurrentFont,
    MatchPolicy,
    WriteResult,
)
from ..domain.services.font_matcher import FontMatcher, normalize_font_name
from ..infrastructure.fonts.font_cache import FontCache, font_cache
from ..infrastructure.fonts.font_enumerator import FontEnumerator
from ..infrastructure.fonts.font_sources import FontSource
from ..infrastructure.process.terminal_reloader import TerminalReloader
from ..infrastructure.storage.kitty_config_store import KittyConfigStore
from ..infrastructure.storage.settings_manager import SettingsManager
from ..utils.config_paths import get_default_kitty_conf_path

logger = logging.getLogger("nekifoch.config_service")

_POSITIVE_INTEGER = re.compile(r"^\d+$")


class ConfigService:
    """Font operations on a kitty config file."""

    def __init__(self,
                 store: KittyConfigStore,
                 enumerator: Optional[FontEnumerator] = None,
                 matcher: Optional[FontMatcher] = None,
                 cache: Optional[FontCache] = None,
                 reloader: Optional[TerminalReloader] = None):
        self.store = store
        self.enumerator = enumerator or FontEnumerator()
        self.matcher = matcher or FontMatcher()
        self.cache = cache if cache is not None else font_cache
        self.reloader = reloader or TerminalReloader()

    # --- Queries --------------------------------------------------------------------

    def check(self) -> CurrentFont:
        """
        Read the configured font family and size.

        Raises:
            NotFoundError: no font_family entry in the config
            ConfigIOError: the config file cannot be read
        """
        current = self.store.read_current()
        if current[FONT_FAMILY] is None:
            raise NotFoundError(f"Font family not found in configuration {self.store.path}")
        return CurrentFont(font=current[FONT_FAMILY], size=current[FONT_SIZE])

    def compatible_fonts(self) -> CompatibleFontIndex:
        """
        Installed fonts the terminal supports.

        Served from the font cache when populated; otherwise enumerated now
        and cached only if every font tool ran.
        """
        if self.cache.compatible is not None:
            return self.cache.compatible

        installed = self._installed_fonts()
        installed_ok = self.enumerator.last_error is None
        supported = self.enumerator.list_terminal_supported()
        supported_ok = self.enumerator.last_error is None

        index = self.matcher.intersect(installed, supported)
        if installed_ok and supported_ok:
            self.cache.store(installed, index)
        else:
            logger.info("Font tools unavailable; compatible fonts not cached")
        return index

    def list_fonts(self) -> List[str]:
        """Terminal names of the compatible fonts. Empty when font tools are unavailable."""
        return self.compatible_fonts().names()

    def complete_fonts(self, prefix: str = "") -> List[str]:
        """Compatible font keys containing `prefix` (case-insensitive), for completion."""
        return self.compatible_fonts().complete(prefix)

    def is_font_installed(self, name: str) -> bool:
        """Whether `name` is installed, ignoring whitespace differences."""
        key = normalize_font_name(name)
        return any(normalize_font_name(font) == key for font in self._installed_fonts())

    def refresh_fonts(self) -> None:
        """Drop cached fonts; the next lookup enumerates again."""
        self.cache.clear()

    def _installed_fonts(self) -> List[str]:
        if self.cache.installed is not None:
            return self.cache.installed
        return self.enumerator.list_installed()

    # --- Mutations ------------------------------------------------------------------

    def set_font_raw(self, name: str) -> WriteResult:
        """Write `name` as the font family, as given."""
        family = (name or "").strip()
        if not family:
            raise InvalidInputError("Font family must not be empty")
        if "\n" in family or "\r" in family:
            raise InvalidInputError("Font family must be a single line")
        return self._write(FONT_FAMILY, family)

    def set_font_by_key(self, key: str) -> WriteResult:
        """
        Write the terminal name of a compatible font.

        Args:
            key: Normalized font name from the compatible font index

        Raises:
            InvalidInputError: `key` is not a compatible font
        """
        family = self.compatible_fonts().resolve(normalize_font_name(key or ""))
        if family is None:
            raise InvalidInputError(f"'{key}' is not a font the terminal supports")
        return self._write(FONT_FAMILY, family)

    def set_font(self, name: str, by_key: bool = False) -> WriteResult:
        """Set the font family from a raw name or, with `by_key`, a compatible font key."""
        if by_key:
            return self.set_font_by_key(name)
        return self.set_font_raw(name)

    def set_size(self, size: Union[int, str]) -> WriteResult:
        """
        Set the font size.

        Raises:
            InvalidInputError: `size` is not a positive integer
        """
        if isinstance(size, bool):
            raise InvalidInputError(f"Font size must be a positive integer, got {size!r}")
        value = str(size).strip()
        if not _POSITIVE_INTEGER.match(value) or int(value) <= 0:
            raise InvalidInputError(f"Font size must be a positive integer, got {size!r}")
        return self._write(FONT_SIZE, str(int(value)))

    def _write(self, key: str, value: str) -> WriteResult:
        self.store.write_value(key, value)
        reloaded = self.reloader.reload()
        return WriteResult(key=key, value=value, reloaded=reloaded)


def _build_installed_source(source_name: str, timeout: float) -> Optional[FontSource]:
    if source_name == "qt":
        from ..infrastructure.fonts.qt_font_source import QtFontSource
        return QtFontSource()
    if source_name != "fc-list":
        logger.warning(f"Unknown installed font source '{source_name}', using fc-list")
    return None


def build_config_service(settings: SettingsManager,
                         conf_path: Optional[Union[str, Path]] = None,
                         policy: Optional[MatchPolicy] = None) -> ConfigService:
    """
    Wire a ConfigService from user settings.

    Args:
        settings: Preferences for paths, policy, timeout and reload signal
        conf_path: Overrides `kitty.conf_path`
        policy: Overrides `fonts.match_policy`
    """
    path = conf_path or settings.get('kitty.conf_path') or get_default_kitty_conf_path()
    if policy is None:
        policy = MatchPolicy.from_value(settings.get('fonts.match_policy', 'normalized'))
    timeout = settings.get('commands.timeout', 10.0)

    enumerator = FontEnumerator(
        installed_source=_build_installed_source(settings.get('fonts.installed_source', 'fc-list'), timeout),
        timeout=timeout,
    )
    reloader = TerminalReloader(
        process_name=settings.get('kitty.process_name', 'kitty'),
        signal_name=settings.get('kitty.reload_signal', 'SIGUSR1'),
    )

    def _on_settings_change(key_path: str) -> None:
        if key_path.startswith('fonts.'):
            font_cache.clear()

    settings.on_change(_on_settings_change)

    logger.debug(f"Config service for {path} with {policy.value} matching")
    return ConfigService(
        store=KittyConfigStore(path),
        enumerator=enumerator,
        matcher=FontMatcher(policy),
        reloader=reloader,
    )
