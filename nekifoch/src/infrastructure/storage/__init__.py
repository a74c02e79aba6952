"""
Storage infrastructure for Nekifoch.

Provides the kitty config store and the tool's own settings management.
"""

from .kitty_config_store import KittyConfigStore
from .settings_manager import SettingsManager, get_settings

__all__ = [
    'KittyConfigStore',
    'SettingsManager',
    'get_settings',
]
