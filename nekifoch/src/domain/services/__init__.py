"""Domain services for Nekifoch."""

from .font_matcher import FontMatcher, normalize_font_name, build_font_set

__all__ = [
    'FontMatcher',
    'normalize_font_name',
    'build_font_set',
]
