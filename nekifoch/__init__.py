"""
nekifoch - kitty font switcher

Reads and patches the kitty terminal configuration to change the font
family and size, and lists installed fonts that kitty can render.
"""

from .__version__ import (
    __version__,
    __title__,
    __description__,
    __author__,
    __author_email__,
    __license__,
    __url__,
    VERSION_INFO,
)

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__author__",
    "__author_email__",
    "__license__",
    "__url__",
    "VERSION_INFO",
]
