"""Domain models for Nekifoch."""

from .font_models import (
    FONT_FAMILY,
    FONT_SIZE,
    CONFIG_KEYS,
    FontSet,
    MatchPolicy,
    CurrentFont,
    WriteResult,
    CompatibleFontIndex,
)

__all__ = [
    'FONT_FAMILY',
    'FONT_SIZE',
    'CONFIG_KEYS',
    'FontSet',
    'MatchPolicy',
    'CurrentFont',
    'WriteResult',
    'CompatibleFontIndex',
]
