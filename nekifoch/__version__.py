"""Version information for Nekifoch."""

# Version components
VERSION_MAJOR = 0
VERSION_MINOR = 3
VERSION_PATCH = 0
VERSION_INFO = (VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)

# Dynamically construct version string
__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"
__title__ = "nekifoch"
__description__ = "Change the kitty terminal font family and size from the command line"
__author__ = "NeViRAIDE"
__author_email__ = "nekifoch@users.noreply.github.com"
__license__ = "MIT"
__url__ = "https://github.com/NeViRAIDE/nekifoch.nvim"
__maintainer__ = "NeViRAIDE"
__keywords__ = ["kitty", "terminal", "font", "fontconfig", "config"]
