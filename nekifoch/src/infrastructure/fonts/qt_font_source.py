"""
Native font source for Nekifoch.

Lists installed families through Qt's font database instead of spawning
fc-list. Selected with the `fonts.installed_source = "qt"` setting.
"""

import os
import logging
from typing import List

from PyQt6.QtGui import QFontDatabase, QGuiApplication

from ...domain.errors import ToolUnavailableError
from .font_sources import FontSource

logger = logging.getLogger("nekifoch.qt_font_source")


class QtFontSource(FontSource):
    """Installed font families from QFontDatabase."""

    name = "QFontDatabase"

    def __init__(self):
        self._app = None

    def _ensure_application(self) -> None:
        # QFontDatabase needs a QGuiApplication; none exists outside a GUI
        if QGuiApplication.instance() is None:
            os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
            self._app = QGuiApplication([])
            logger.debug("Created offscreen QGuiApplication for font lookup")

    def families(self) -> List[str]:
        try:
            self._ensure_application()
            font_families = QFontDatabase.families()
        except Exception as e:
            raise ToolUnavailableError(self.name, str(e)) from e
        logger.debug(f"Loaded {len(font_families)} font families from Qt")
        return list(font_families)
