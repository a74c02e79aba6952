"""
Configuration paths utilities for Nekifoch.

Provides centralized path management for all application data.
"""

import os
from pathlib import Path


def get_user_data_dir() -> Path:
    """
    Get the user data directory for Nekifoch.

    Returns:
        Path to the user data directory (AppData/Roaming/Nekifoch on Windows)
    """
    if os.name == 'nt':  # Windows
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata) / "Nekifoch"

    # Use XDG standard on Linux/Mac
    xdg_data_home = os.environ.get('XDG_DATA_HOME')
    if xdg_data_home:
        return Path(xdg_data_home) / "nekifoch"

    # Default XDG location
    return Path.home() / ".local" / "share" / "nekifoch"


def get_configs_dir() -> Path:
    """Get the configs directory."""
    configs_dir = get_user_data_dir() / "configs"
    configs_dir.mkdir(parents=True, exist_ok=True)
    return configs_dir


def get_logs_dir() -> Path:
    """Get the logs directory."""
    logs_dir = get_user_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def get_default_kitty_conf_path() -> Path:
    """Default kitty.conf location, honouring KITTY_CONFIG_DIRECTORY and XDG_CONFIG_HOME."""
    kitty_dir = os.environ.get('KITTY_CONFIG_DIRECTORY')
    if kitty_dir:
        return Path(kitty_dir).expanduser() / "kitty.conf"

    xdg_config_home = os.environ.get('XDG_CONFIG_HOME')
    if xdg_config_home:
        return Path(xdg_config_home) / "kitty" / "kitty.conf"

    return Path.home() / ".config" / "kitty" / "kitty.conf"
