"""Command line entry point.

    typedmessages compile [--watch] [--config PATH] [-v]

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import threading
from collections.abc import Sequence
from pathlib import Path

from typedmessages.compiler import compile_translations
from typedmessages.config import load_config
from typedmessages.diagnostics import TypedMessagesError

__all__ = ["main"]

logger = logging.getLogger("typedmessages")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typedmessages",
        description="Generate typed translation modules from ICU message files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate every index.ts once:
  typedmessages compile

  # Keep regenerating while translation files change:
  typedmessages compile --watch
""",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)
    compile_parser = subcommands.add_parser("compile", help="Generate translation modules")
    compile_parser.add_argument(
        "--watch",
        "-w",
        action="store_true",
        help="Watch translation files and regenerate on change",
    )
    compile_parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Config file (default: nearest typedmessages.toml or pyproject.toml)",
    )
    compile_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )
    return parser


def main(argv: Sequence[str] | None = None, *, stop: threading.Event | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments (default: sys.argv[1:])
        stop: Event ending watch mode when set (default: wait for Ctrl+C)

    Returns:
        Process exit code
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        close = compile_translations(config, watch=args.watch)
    except (TypedMessagesError, OSError) as e:
        logger.error("%s", e)
        return 1

    if close is None:
        return 0
    try:
        (stop or threading.Event()).wait()
    except KeyboardInterrupt:
        pass
    finally:
        close()
    return 0
