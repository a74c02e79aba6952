"""
Font Enumerator for Nekifoch.

Collects installed fonts and terminal-supported fonts from their sources.
Enumeration never raises: a failing tool is logged and reported as an
empty listing, and `last_error` records the failure for diagnostics.
"""

import logging
from typing import Iterable, List, Optional

from ...domain.errors import ToolUnavailableError
from .font_sources import (
    DEFAULT_TIMEOUT,
    FontSource,
    FcListFontSource,
    KittyFontMapSource,
    KittyListFontsSource,
)

logger = logging.getLogger("nekifoch.font_enumerator")


def dedupe(names: Iterable[str]) -> List[str]:
    """Drop repeated names, keeping first-seen order."""
    seen = set()
    unique = []
    for name in names:
        if name not in seen:
            seen.add(name)
            unique.append(name)
    return unique


class FontEnumerator:
    """Produces the raw installed and terminal-supported font lists."""

    def __init__(self,
                 installed_source: Optional[FontSource] = None,
                 supported_source: Optional[FontSource] = None,
                 fallback_source: Optional[FontSource] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.installed_source = installed_source or FcListFontSource(timeout)
        self.supported_source = supported_source or KittyFontMapSource(timeout)
        # Older kitty versions lack the font map, only +list-fonts
        if fallback_source is None and supported_source is None:
            fallback_source = KittyListFontsSource(timeout)
        self.fallback_source = fallback_source
        self.last_error: Optional[ToolUnavailableError] = None

    def list_installed(self) -> List[str]:
        """
        Installed font families, deduplicated in first-seen order.

        Returns:
            Font family names; empty if the font tool is unavailable
        """
        self.last_error = None
        source = self.installed_source
        try:
            fonts = dedupe(source.families())
        except ToolUnavailableError as e:
            self.last_error = e
            logger.warning(f"Font tool unavailable ({source.name}): {e}. No installed fonts listed")
            return []

        if fonts:
            logger.debug(f"{source.name} listed {len(fonts)} installed fonts")
        else:
            logger.info(f"{source.name} ran but reported no installed fonts")
        return fonts

    def list_terminal_supported(self) -> List[str]:
        """
        Font families the terminal reports it can use.

        The structured source is tried first and the line-oriented fallback
        only when it fails or lists nothing.
        """
        self.last_error = None
        sources = [self.supported_source]
        if self.fallback_source is not None:
            sources.append(self.fallback_source)

        error = None
        ran = False
        for source in sources:
            try:
                fonts = dedupe(source.families())
            except ToolUnavailableError as e:
                error = e
                logger.warning(f"Terminal font tool unavailable ({source.name}): {e}")
                continue
            ran = True
            if fonts:
                logger.debug(f"{source.name} listed {len(fonts)} supported fonts")
                return fonts
            logger.info(f"{source.name} ran but reported no fonts")

        if not ran:
            self.last_error = error
        return []
