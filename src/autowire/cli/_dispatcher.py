"""
Auto-discovery CLI dispatcher for Autowire.

Adding a command means adding a module to ``cli/commands/``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from contextlib import nullcontext
from functools import lru_cache
from pathlib import Path
from typing import Any

from autowire.core.utils.profiling import Profiler, enable_profiler, span


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Import every ``cli/commands/*.py`` module and collect its entry points."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        module = importlib.import_module(f"autowire.cli.commands.{item.stem}")
        commands[item.stem] = {
            "summary": getattr(module, "SUMMARY", item.stem),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autowire",
        description="Autowire - ordered auto-configuration resolution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print timing spans for resolution phases to stderr.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )
    for cmd_name, cmd_info in discover_commands().items():
        primary_name = cmd_name.replace("_", "-")
        cmd_parser = subparsers.add_parser(primary_name, help=cmd_info["summary"])
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])
    return parser


def _get_version() -> str:
    from autowire import __version__

    return __version__


def _print_profile(profiler: Profiler) -> None:
    for line in profiler.render():
        print(line, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Autowire CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    handler = getattr(args, "_func", None)
    if handler is None:
        parser.print_help()
        return 0

    profiler = Profiler() if args.profile else None
    ctx = enable_profiler(profiler) if profiler else nullcontext()
    with ctx:
        with span("cli.total", command=args.command):
            result = int(handler(args) or 0)
    if profiler is not None:
        _print_profile(profiler)
    return result


if __name__ == "__main__":
    sys.exit(main())
