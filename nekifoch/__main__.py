"""
Command line entry point for Nekifoch.

    python -m nekifoch check
    python -m nekifoch set_font JetBrains Mono
    python -m nekifoch set_font --key JetBrainsMono
    python -m nekifoch set_size 13
    python -m nekifoch list
"""

import sys
import logging
import argparse
from typing import List, Optional

from .__version__ import __version__
from .src.application.config_service import ConfigService, build_config_service
from .src.domain.errors import NekifochError, NotFoundError
from .src.domain.models.font_models import MatchPolicy, WriteResult
from .src.infrastructure.logging.logging_config import setup_logging
from .src.infrastructure.storage.settings_manager import get_settings

logger = logging.getLogger("nekifoch.main")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nekifoch",
        description="Change the kitty terminal font family and size"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to kitty.conf (overrides the saved setting)")
    parser.add_argument("--policy", choices=[p.value for p in MatchPolicy],
                        help="How installed fonts are matched against kitty's fonts")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check", help="Show the configured font family and size")

    set_font = subparsers.add_parser("set_font", help="Set the font family")
    set_font.add_argument("name", nargs="+", help="Font family name")
    set_font.add_argument("--key", action="store_true",
                          help="Treat NAME as a key from `list`/`complete` and write kitty's name for it")

    set_size = subparsers.add_parser("set_size", help="Set the font size")
    set_size.add_argument("size", help="Font size (positive integer)")

    subparsers.add_parser("list", help="List installed fonts kitty can use")

    complete = subparsers.add_parser("complete", help="Complete a font key for set_font --key")
    complete.add_argument("prefix", nargs="?", default="")

    installed = subparsers.add_parser("installed", help="Check whether a font is installed")
    installed.add_argument("name", nargs="+", help="Font family name")

    return parser


def _report_write(result: WriteResult, label: str) -> None:
    print(f"{label} set to {result.value}")
    if not result.reloaded:
        print("No running kitty found; the change applies on next start")


def run_command(service: ConfigService, args: argparse.Namespace) -> int:
    """Execute one parsed command against the service."""
    if args.command == "check":
        current = service.check()
        print(f"Font family: {current.font}")
        print(f"Font size: {current.size if current.size is not None else 'not set'}")
    elif args.command == "set_font":
        result = service.set_font(" ".join(args.name), by_key=args.key)
        _report_write(result, "Font family")
    elif args.command == "set_size":
        _report_write(service.set_size(args.size), "Font size")
    elif args.command == "list":
        fonts = service.list_fonts()
        if not fonts:
            print("No compatible fonts found")
        else:
            print("Available fonts:")
            for font in fonts:
                print(f"  - {font}")
    elif args.command == "complete":
        for key in service.complete_fonts(args.prefix):
            print(key)
    elif args.command == "installed":
        name = " ".join(args.name)
        if not service.is_font_installed(name):
            print(f"{name} is NOT installed")
            return EXIT_NOT_FOUND
        print(f"{name} is installed")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(
        debug=args.debug or settings.get('app.log_level') == 'DEBUG',
        retention_days=settings.get('app.log_retention_days', 10),
    )

    try:
        policy = MatchPolicy.from_value(args.policy) if args.policy else None
        service = build_config_service(settings, conf_path=args.config, policy=policy)
        return run_command(service, args)
    except NotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_NOT_FOUND
    except (NekifochError, ValueError) as e:
        logger.info(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
