"""
Font enumeration for Nekifoch.

QtFontSource lives in qt_font_source.py and is imported on demand so the
command-line sources work without a Qt platform.
"""

from .font_sources import (
    FontSource,
    CommandFontSource,
    FcListFontSource,
    KittyFontMapSource,
    KittyListFontsSource,
    run_command,
)
from .font_enumerator import FontEnumerator
from .font_cache import FontCache, font_cache

__all__ = [
    'FontSource',
    'CommandFontSource',
    'FcListFontSource',
    'KittyFontMapSource',
    'KittyListFontsSource',
    'run_command',
    'FontEnumerator',
    'FontCache',
    'font_cache',
]
