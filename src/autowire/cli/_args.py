"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Project root holding .autowire/config (default: current directory)",
    )


def add_manifest_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("manifest", help="Path to a session manifest (YAML)")


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add --json and --repo-root."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_manifest_arg",
    "add_standard_flags",
]
