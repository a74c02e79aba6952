"""
Error types for Nekifoch.

Enumeration failures are logged and degrade to empty results; config
write failures always propagate to the caller.
"""


class NekifochError(Exception):
    """Base class for every error raised by Nekifoch."""
    pass


class ConfigIOError(NekifochError, IOError):
    """The kitty config file could not be read or written."""
    pass


class NotFoundError(NekifochError, LookupError):
    """A requested config entry is not present in the file."""
    pass


class ToolUnavailableError(NekifochError):
    """An external font or terminal command failed to start, exited non-zero or timed out."""

    def __init__(self, tool: str, reason: str):
        super().__init__(f"{tool}: {reason}")
        self.tool = tool
        self.reason = reason


class InvalidInputError(NekifochError, ValueError):
    """Input rejected before any write was attempted."""
    pass
