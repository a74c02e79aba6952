"""
Font Matcher for Nekifoch.

Intersects the installed font list with the fonts the terminal supports.
Three policies are available (see MatchPolicy); NORMALIZED is the default
and compares names with all whitespace removed, so "JetBrains Mono" and
"JetBrainsMono" are the same font.
"""

import logging
from typing import Iterable, Optional

from ..models.font_models import CompatibleFontIndex, FontSet, MatchPolicy

logger = logging.getLogger("nekifoch.font_matcher")


def normalize_font_name(name: str) -> str:
    """Remove all whitespace from a font name. Idempotent."""
    return "".join(name.split())


def build_font_set(names: Iterable[str]) -> FontSet:
    """
    Key font names by their normalized form.

    The first raw name seen for a normalized key is kept.
    """
    font_set: FontSet = {}
    for name in names:
        font_set.setdefault(normalize_font_name(name), name)
    return font_set


class FontMatcher:
    """Computes which installed fonts the terminal can render."""

    def __init__(self, policy: MatchPolicy = MatchPolicy.NORMALIZED):
        self.policy = policy

    def intersect(self, installed: Iterable[str], supported: Iterable[str]) -> CompatibleFontIndex:
        """
        Build the compatible font index.

        Args:
            installed: Font families installed on the system
            supported: Font families reported by the terminal

        Returns:
            CompatibleFontIndex mapping normalized name -> terminal font name
        """
        supported = list(supported)
        supported_raw = set(supported)
        supported_set = build_font_set(supported)

        compatible: FontSet = {}
        for font in installed:
            key = normalize_font_name(font)
            if not key or key in compatible:
                continue
            match = self._match(font, key, supported, supported_raw, supported_set)
            if match is not None:
                compatible[key] = match

        index = CompatibleFontIndex.from_mapping(compatible)
        logger.debug(f"{self.policy.value} match: {len(index)} compatible fonts")
        return index

    def _match(self, font: str, key: str, supported: list, supported_raw: set,
               supported_set: FontSet) -> Optional[str]:
        if self.policy is MatchPolicy.EXACT:
            return font if font in supported_raw else None

        if self.policy is MatchPolicy.SUBSTRING:
            for candidate in supported:
                if font in candidate:
                    return candidate
            return None

        if font in supported_raw:
            return font
        return supported_set.get(key)
