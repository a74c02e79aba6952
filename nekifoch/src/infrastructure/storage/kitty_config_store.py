"""
Kitty config store for Nekifoch.

Owns the font lines of kitty.conf. Entries are located by line prefix,
not by a structured parse, and every other line is written back exactly
as it was read (content, order and line endings).

Writes go through a temporary file in the same directory which is then
renamed over the config, so an interrupted write never leaves kitty.conf
truncated. Symlinked configs (dotfile repos) are resolved first so the
link itself is kept.
"""

import os
import re
import shutil
import logging
import tempfile
import contextlib
from pathlib import Path
from typing import Dict, Optional, Union

from ...domain.errors import ConfigIOError, InvalidInputError
from ...domain.models.font_models import CONFIG_KEYS, FONT_FAMILY, FONT_SIZE

logger = logging.getLogger("nekifoch.config_store")

ENCODING = "utf-8"

# A purely numeric remainder ("font_family 12") is not a family name
_FAMILY_LINE = re.compile(r"^font_family[ \t]+(?!\d+(?:\.\d+)?[ \t]*$)(\S.*?)[ \t]*$")
_SIZE_LINE = re.compile(r"^font_size[ \t]+(\d+(?:\.\d+)?)")
_READ_PATTERNS = {FONT_FAMILY: _FAMILY_LINE, FONT_SIZE: _SIZE_LINE}

# Line text as _entry_pattern sees it: up to the first \r or \n
_LINE = re.compile(r"^[^\r\n]*", re.MULTILINE)


def _entry_pattern(key: str) -> "re.Pattern[str]":
    """Whole line starting with `key` followed by whitespace or end of line."""
    return re.compile(rf"^{re.escape(key)}(?=[ \t\r\n]|$)[^\r\n]*", re.MULTILINE)


class KittyConfigStore:
    """
    Reads and patches the font entries of a kitty config file.

    A font_family line counts only when its value is not wholly numeric. A
    leading digit alone does not disqualify it: "font_family 12" is skipped
    but "font_family 3270 Nerd Font" is read.
    Values are only written if they would read back unchanged.

    No locking is done; callers serialize access.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def read_current(self) -> Dict[str, Optional[str]]:
        """
        Read the active font entries.

        Returns:
            {'font_family': str | None, 'font_size': str | None}, using the
            first matching line of each in file order
        """
        content = self._read()

        current: Dict[str, Optional[str]] = {FONT_FAMILY: None, FONT_SIZE: None}
        for line in _LINE.findall(content):
            if current[FONT_FAMILY] is None:
                match = _FAMILY_LINE.match(line)
                if match:
                    current[FONT_FAMILY] = match.group(1)
                    continue
            if current[FONT_SIZE] is None:
                match = _SIZE_LINE.match(line)
                if match:
                    current[FONT_SIZE] = match.group(1)
            if current[FONT_FAMILY] is not None and current[FONT_SIZE] is not None:
                break

        logger.debug(f"Current entries in {self.path}: {current}")
        return current

    def write_value(self, key: str, new_value: str) -> int:
        """
        Replace every `key` line with `key new_value`.

        If the key does not appear in the file the entry is appended.

        Args:
            key: 'font_family' or 'font_size'
            new_value: Value to write; must fit on one line

        Returns:
            Number of existing lines replaced
        """
        if key not in CONFIG_KEYS:
            raise InvalidInputError(f"Unsupported config key: {key!r}")
        value = str(new_value)
        if "\n" in value or "\r" in value:
            raise InvalidInputError(f"Value for {key} must be a single line")
        match = _READ_PATTERNS[key].match(f"{key} {value}")
        if match is None or match.group(1) != value:
            raise InvalidInputError(f"{value!r} would not be read back as {key}")

        content = self._read()
        entry = f"{key} {value}"
        modified, replaced = _entry_pattern(key).subn(lambda _match: entry, content)

        if replaced == 0:
            newline = "\r\n" if "\r\n" in content else "\n"
            if modified and not modified.endswith("\n"):
                modified += newline
            modified += entry + newline
            logger.info(f"{key} not found in {self.path}, appending it")

        self._write(modified)
        logger.info(f"Set {key} to {value!r} in {self.path} ({replaced} line(s) replaced)")
        return replaced

    def _read(self) -> str:
        try:
            with open(self.path, 'r', encoding=ENCODING, newline='') as f:
                return f.read()
        except OSError as e:
            raise ConfigIOError(f"Cannot read kitty config {self.path}: {e}") from e

    def _write(self, content: str) -> None:
        target = self.path.resolve()
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
            with os.fdopen(fd, 'w', encoding=ENCODING, newline='') as f:
                f.write(content)
            shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise ConfigIOError(f"Cannot write kitty config {self.path}: {e}") from e
