"""
Tests for font source output parsing and external command handling.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from nekifoch.src.domain.errors import ToolUnavailableError
from nekifoch.src.infrastructure.fonts.font_sources import (
    FcListFontSource,
    KittyFontMapSource,
    KittyListFontsSource,
    parse_family_fragments,
    parse_fc_list_output,
    parse_list_fonts_output,
    run_command,
)

RUN = "nekifoch.src.infrastructure.fonts.font_sources.subprocess.run"

KITTY_FONT_MAP = """{
  "family_map": {
    "jetbrains mono": [
      {
        "path": "/usr/share/fonts/JetBrainsMono-Regular.ttf",
        "family": "JetBrains Mono",
        "style": "Regular"
      },
      {
        "family": "JetBrains Mono",
        "style": "Bold"
      }
    ],
    "fira code": [
      {"family":"Fira Code", "style": "Regular"}
    ],
    "quoted": [
      {"family": "Say \\"Hi\\" Sans"}
    ]
  }
}
"""


def completed(stdout: str) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


class TestParsers:

    def test_fc_list_keeps_first_alias(self):
        output = "DejaVu Sans,DejaVu Sans Condensed\nHack\n\nNoto Sans CJK JP,Noto Sans CJK JP Regular\n"
        assert parse_fc_list_output(output) == ["DejaVu Sans", "Hack", "Noto Sans CJK JP"]

    def test_fc_list_unescapes(self):
        assert parse_fc_list_output("Font Awesome 6 Free\\-Solid,FA\n") == ["Font Awesome 6 Free-Solid"]
        assert parse_fc_list_output("Odd\\,Name,Other\n") == ["Odd,Name"]

    def test_family_fragments(self):
        assert parse_family_fragments(KITTY_FONT_MAP) == [
            "JetBrains Mono", "JetBrains Mono", "Fira Code", 'Say "Hi" Sans'
        ]

    def test_family_fragments_ignores_other_keys(self):
        assert parse_family_fragments('{"family_map": {}, "style": "Bold"}') == []

    def test_list_fonts_takes_unindented_lines(self):
        output = (
            "Fira Code\n"
            "    Fira Code Regular (/usr/share/fonts/FiraCode-Regular.ttf)\n"
            "    Fira Code Bold (/usr/share/fonts/FiraCode-Bold.ttf)\n"
            "\n"
            "JetBrains Mono\n"
            "\tJetBrains Mono Italic\n"
        )
        assert parse_list_fonts_output(output) == ["Fira Code", "JetBrains Mono"]


class TestRunCommand:

    def test_returns_stdout(self):
        with patch(RUN, return_value=completed("Hack\n")) as run:
            assert run_command(["fc-list", ":", "family"], timeout=3) == "Hack\n"
        args, kwargs = run.call_args
        assert args[0] == ["fc-list", ":", "family"]
        assert kwargs["timeout"] == 3
        assert kwargs["check"] is True

    @pytest.mark.parametrize("error,reason", [
        (FileNotFoundError("fc-list"), "command not found"),
        (subprocess.TimeoutExpired(["fc-list"], 3), "timed out after 3s"),
        (subprocess.CalledProcessError(1, ["fc-list"]), "exited with status 1"),
        (PermissionError("denied"), "denied"),
    ])
    def test_failures_become_tool_unavailable(self, error, reason):
        with patch(RUN, side_effect=error):
            with pytest.raises(ToolUnavailableError) as exc_info:
                run_command(["fc-list"], timeout=3)
        assert exc_info.value.tool == "fc-list"
        assert reason in exc_info.value.reason


class TestCommandSources:

    def test_fc_list_source(self):
        with patch(RUN, return_value=completed("Hack\nFira Code,Fira Code Retina\n")) as run:
            assert FcListFontSource(timeout=2).families() == ["Hack", "Fira Code"]
        assert run.call_args[0][0] == ["fc-list", ":", "family"]

    def test_kitty_font_map_source(self):
        with patch(RUN, return_value=completed(KITTY_FONT_MAP)) as run:
            families = KittyFontMapSource().families()
        assert "Fira Code" in families
        assert run.call_args[0][0][:2] == ["kitty", "+runpy"]

    def test_kitty_list_fonts_source(self):
        with patch(RUN, return_value=completed("Hack\n    Hack Bold\n")) as run:
            assert KittyListFontsSource().families() == ["Hack"]
        assert run.call_args[0][0] == ["kitty", "+list-fonts"]

    def test_source_names_are_distinct(self):
        names = {FcListFontSource.name, KittyFontMapSource.name, KittyListFontsSource.name}
        assert len(names) == 3


class TestQtFontSource:

    def test_lists_qt_families(self):
        pytest.importorskip("PyQt6.QtGui")
        from nekifoch.src.infrastructure.fonts import qt_font_source

        with patch.object(qt_font_source, "QGuiApplication") as app_cls, \
                patch.object(qt_font_source, "QFontDatabase") as font_db:
            app_cls.instance.return_value = MagicMock()
            font_db.families.return_value = ["Hack", "Fira Code"]
            assert qt_font_source.QtFontSource().families() == ["Hack", "Fira Code"]

    def test_qt_failure_becomes_tool_unavailable(self):
        pytest.importorskip("PyQt6.QtGui")
        from nekifoch.src.infrastructure.fonts import qt_font_source

        with patch.object(qt_font_source, "QGuiApplication") as app_cls, \
                patch.object(qt_font_source, "QFontDatabase") as font_db:
            app_cls.instance.return_value = MagicMock()
            font_db.families.side_effect = RuntimeError("no platform plugin")
            with pytest.raises(ToolUnavailableError):
                qt_font_source.QtFontSource().families()
