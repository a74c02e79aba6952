"""
Shared fixtures for Nekifoch tests.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Add project root to Python path
project_root = str(Path(__file__).resolve().parents[2])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from nekifoch.src.domain.errors import ToolUnavailableError
from nekifoch.src.infrastructure.fonts.font_cache import font_cache
from nekifoch.src.infrastructure.fonts.font_sources import FontSource


SAMPLE_CONFIG = (
    "# kitty.conf\n"
    "font_family JetBrains Mono\n"
    "bold_font auto\n"
    "font_size 12\n"
    "background_opacity 0.9\n"
)


class FakeFontSource(FontSource):
    """Font source returning a fixed list, or failing like a missing tool."""

    def __init__(self, fonts: Optional[List[str]] = None, fail: bool = False, name: str = "fake"):
        self.fonts = list(fonts or [])
        self.fail = fail
        self.name = name
        self.calls = 0

    def families(self) -> List[str]:
        self.calls += 1
        if self.fail:
            raise ToolUnavailableError(self.name, "command not found")
        return list(self.fonts)


class FakeReloader:
    """Records reload requests instead of signalling processes."""

    def __init__(self, signalled: int = 1):
        self.signalled = signalled
        self.calls = 0

    def reload(self) -> int:
        self.calls += 1
        return self.signalled


@pytest.fixture(autouse=True)
def clean_font_cache():
    """Each test starts and ends with an empty process-wide font cache."""
    font_cache.clear()
    yield
    font_cache.clear()


@pytest.fixture
def kitty_conf(tmp_path):
    """A kitty.conf with a font family, a font size and unrelated lines."""
    path = tmp_path / "kitty.conf"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def fake_reloader():
    return FakeReloader()


@pytest.fixture
def isolated_data_home(tmp_path, monkeypatch):
    """Point the user data directory at a temporary location."""
    data_home = tmp_path / "data"
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    if os.name == 'nt':
        monkeypatch.setenv("APPDATA", str(data_home))
    return data_home
