from __future__ import annotations

import argparse
from pathlib import Path

from autowire.cli._args import add_json_flag, add_manifest_arg
from autowire.cli._output import OutputFormatter
from autowire.core.exceptions import ManifestError

SUMMARY = "Validate a session manifest against the bundled schema"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_manifest_arg(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    from autowire.core.manifest import load_session

    formatter = OutputFormatter(json_mode=args.json)
    path = Path(args.manifest)
    try:
        session = load_session(path)
    except ManifestError as exc:
        formatter.error(exc)
        return 1
    formatter.success(
        {"manifest": str(path), "candidates": len(session.candidates), "triggers": len(session.triggers)},
        f"{path}: OK ({len(session.candidates)} candidates, {len(session.triggers)} triggers)",
    )
    return 0
