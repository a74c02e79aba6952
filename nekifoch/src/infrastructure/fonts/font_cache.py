"""
Process-wide font cache for Nekifoch.

Holds the installed font list and the compatible font index after the
first successful enumeration. Nothing refreshes it automatically; call
clear() to force the next lookup to enumerate again.
"""

import logging
from typing import List, Optional

from ...domain.models.font_models import CompatibleFontIndex

logger = logging.getLogger("nekifoch.font_cache")


class FontCache:
    """Cached font enumeration results."""

    def __init__(self):
        self.installed: Optional[List[str]] = None
        self.compatible: Optional[CompatibleFontIndex] = None

    @property
    def is_populated(self) -> bool:
        return self.compatible is not None

    def store(self, installed: List[str], compatible: CompatibleFontIndex) -> None:
        self.installed = list(installed)
        self.compatible = compatible
        logger.debug(f"Font cache populated: {len(installed)} installed, {len(compatible)} compatible")

    def clear(self) -> None:
        """Forget cached fonts so the next lookup enumerates again."""
        self.installed = None
        self.compatible = None
        logger.debug("Font cache cleared")


# Global instance
font_cache = FontCache()
