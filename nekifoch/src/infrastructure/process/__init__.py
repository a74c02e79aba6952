"""Process helpers for Nekifoch."""

from .terminal_reloader import TerminalReloader

__all__ = [
    'TerminalReloader',
]
