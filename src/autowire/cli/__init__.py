"""
Autowire CLI package.

Commands live in ``cli/commands/*.py`` and are discovered automatically; each
module exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args)``.
"""
from ._args import add_json_flag, add_repo_root_flag, add_standard_flags
from ._output import OutputFormatter

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
]
