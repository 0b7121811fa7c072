from __future__ import annotations

import argparse
from pathlib import Path

from autowire.cli._args import add_manifest_arg, add_standard_flags
from autowire.cli._output import OutputFormatter
from autowire.core.config import AutoConfigureConfig, ConfigManager
from autowire.core.exceptions import AutowireError

SUMMARY = "Resolve a session manifest into the final import order"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_manifest_arg(parser)
    add_standard_flags(parser)
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Additional name to exclude (repeatable, appended to autoconfigure.exclude)",
    )


def _load_settings(args: argparse.Namespace) -> AutoConfigureConfig:
    repo_root = Path(args.repo_root) if args.repo_root else None
    config = dict(ConfigManager(repo_root).load_config(validate=True))
    if args.exclude:
        section = dict(config.get("autoconfigure") or {})
        section["exclude"] = [*AutoConfigureConfig.from_mapping(config).exclude, *args.exclude]
        config["autoconfigure"] = section
    return AutoConfigureConfig.from_mapping(config)


def main(args: argparse.Namespace) -> int:
    from autowire.core.manifest import load_session

    formatter = OutputFormatter(json_mode=args.json)
    try:
        session = load_session(Path(args.manifest))
        result = session.resolve(config=_load_settings(args))
    except AutowireError as exc:
        formatter.error(exc)
        return 1

    lines = [f"{entry.name}  ({entry.provenance.name})" for entry in result.imports]
    formatter.success(result.to_dict(), "\n".join(lines) if lines else "No imports.")
    return 0
