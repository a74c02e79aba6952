"""
Font Models for Nekifoch.

Defines the config keys, matching policies and the values passed between
the config store, the font enumerator and the config service.
"""

from enum import Enum
from typing import Dict, List, Optional
from dataclasses import dataclass, field


FONT_FAMILY = "font_family"
FONT_SIZE = "font_size"
CONFIG_KEYS = (FONT_FAMILY, FONT_SIZE)

# Normalized font name -> raw font name
FontSet = Dict[str, str]


class MatchPolicy(Enum):
    """How installed fonts are compared against terminal-supported fonts."""
    EXACT = "exact"            # Raw names must be identical
    NORMALIZED = "normalized"  # Whitespace-stripped names must be identical
    SUBSTRING = "substring"    # Supported name contains the installed name

    @classmethod
    def from_value(cls, value: str) -> "MatchPolicy":
        """Look up a policy by its value, case-insensitively."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown match policy '{value}' (expected one of: {choices})")


@dataclass
class CurrentFont:
    """Font settings currently active in the kitty config."""
    font: str
    size: Optional[str] = None


@dataclass
class WriteResult:
    """Outcome of a config mutation."""
    key: str
    value: str
    reloaded: int = 0  # Number of terminal processes signalled


@dataclass
class CompatibleFontIndex:
    """
    Installed fonts the terminal can render.

    Maps the normalized font name to the name the terminal reports, and
    keeps the normalized names sorted for listing and completion.
    """
    fonts: FontSet = field(default_factory=dict)
    keys: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, fonts: FontSet) -> "CompatibleFontIndex":
        return cls(fonts=dict(fonts), keys=sorted(fonts))

    def names(self) -> List[str]:
        """Raw terminal font names, in key order."""
        return [self.fonts[key] for key in self.keys]

    def resolve(self, key: str) -> Optional[str]:
        return self.fonts.get(key)

    def complete(self, prefix: str = "") -> List[str]:
        """Keys containing `prefix`, compared case-insensitively."""
        needle = prefix.lower()
        return [key for key in self.keys if needle in key.lower()]

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, key: object) -> bool:
        return key in self.fonts
