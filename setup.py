#!/usr/bin/env python3
"""
Nekifoch Setup Script
Change the kitty terminal font family and size from the command line
"""

from setuptools import setup, find_packages
import os
import sys

# Add the package directory to the path to import version
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'nekifoch'))
from __version__ import (
    __version__,
    __title__,
    __description__,
    __author__,
    __author_email__,
    __license__,
    __url__,
    __keywords__,
)

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

# Read requirements
with open(os.path.join(this_directory, 'requirements.txt')) as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith('#')]

setup(
    name=__title__,
    version=__version__,
    author=__author__,
    author_email=__author_email__,
    description=__description__,
    long_description=long_description,
    long_description_content_type="text/markdown",
    url=__url__,
    license=__license__,
    packages=find_packages(exclude=["nekifoch.tests", "nekifoch.tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Terminals :: Terminal Emulators/X Terminals",
        "Topic :: Utilities",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "nekifoch=nekifoch.__main__:main",
        ],
    },
    zip_safe=False,
    keywords=", ".join(__keywords__),
    project_urls={
        "Bug Reports": "https://github.com/NeViRAIDE/nekifoch.nvim/issues",
        "Source": "https://github.com/NeViRAIDE/nekifoch.nvim",
    },
)
