"""
Font sources for Nekifoch.

A FontSource yields font family names from one place: fontconfig, kitty
itself, or a native library (see qt_font_source.py). Every source raises
ToolUnavailableError when it cannot produce a listing, so callers can tell
a broken tool from an empty one.
"""

import re
import json
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Sequence

from ...domain.errors import ToolUnavailableError

logger = logging.getLogger("nekifoch.font_sources")

DEFAULT_TIMEOUT = 10.0

KITTY_FONTS_MAP_SCRIPT = (
    "from kitty.fonts.common import all_fonts_map; import json; "
    "print(json.dumps(all_fonts_map(True), indent=2))"
)

_FAMILY_FRAGMENT = re.compile(r'"family"\s*:\s*"((?:[^"\\]|\\.)*)"')
_UNESCAPED_COMMA = re.compile(r"(?<!\\),")
_ESCAPE = re.compile(r"\\(.)")


def run_command(argv: Sequence[str], timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Run an external command and return its stdout.

    Raises:
        ToolUnavailableError: the command is missing, exits non-zero or times out
    """
    tool = argv[0]
    logger.debug(f"Running {' '.join(argv)}")
    try:
        result = subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=True,
        )
    except FileNotFoundError as e:
        raise ToolUnavailableError(tool, "command not found") from e
    except subprocess.TimeoutExpired as e:
        raise ToolUnavailableError(tool, f"timed out after {timeout}s") from e
    except subprocess.CalledProcessError as e:
        raise ToolUnavailableError(tool, f"exited with status {e.returncode}") from e
    except OSError as e:
        raise ToolUnavailableError(tool, str(e)) from e
    return result.stdout


def parse_fc_list_output(output: str) -> List[str]:
    """One family per line; only the first of comma-separated aliases is kept."""
    families = []
    for line in output.splitlines():
        first = _UNESCAPED_COMMA.split(line, 1)[0]
        family = _ESCAPE.sub(r"\1", first).strip()
        if family:
            families.append(family)
    return families


def parse_family_fragments(output: str) -> List[str]:
    """Extract every `"family": "<name>"` value from a structured listing."""
    families = []
    for raw in _FAMILY_FRAGMENT.findall(output):
        try:
            family = json.loads(f'"{raw}"')
        except ValueError:
            family = raw
        family = family.strip()
        if family:
            families.append(family)
    return families


def parse_list_fonts_output(output: str) -> List[str]:
    """
    Family names from `kitty +list-fonts`.

    Family lines start in column zero; indented lines describe faces.
    """
    families = []
    for line in output.splitlines():
        if not line.strip() or line[0].isspace():
            continue
        families.append(line.strip())
    return families


class FontSource(ABC):
    """Capability interface for anything that can list font families."""

    name = "font source"

    @abstractmethod
    def families(self) -> List[str]:
        """
        List font family names.

        Raises:
            ToolUnavailableError: the listing could not be produced
        """


class CommandFontSource(FontSource):
    """Font source backed by an external command."""

    command: Sequence[str] = ()

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def families(self) -> List[str]:
        return self.parse(run_command(self.command, self.timeout))

    @abstractmethod
    def parse(self, output: str) -> List[str]:
        """Turn command output into family names."""


class FcListFontSource(CommandFontSource):
    """Installed fonts as reported by fontconfig."""

    name = "fc-list"
    command = ("fc-list", ":", "family")

    def parse(self, output: str) -> List[str]:
        return parse_fc_list_output(output)


class KittyFontMapSource(CommandFontSource):
    """Fonts kitty can use, from its own font map (current kitty versions)."""

    name = "kitty +runpy"
    command = ("kitty", "+runpy", KITTY_FONTS_MAP_SCRIPT)

    def parse(self, output: str) -> List[str]:
        return parse_family_fragments(output)


class KittyListFontsSource(CommandFontSource):
    """Fonts kitty can use, from `kitty +list-fonts` (older kitty versions)."""

    name = "kitty +list-fonts"
    command = ("kitty", "+list-fonts")

    def parse(self, output: str) -> List[str]:
        return parse_list_fonts_output(output)
