"""
Bundled data resources (default configuration and JSON schemas).
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Example:
        >>> get_data_path("schemas", "session.schema.json")
        PosixPath('/path/to/autowire/data/schemas/session.schema.json')
    """
    pkg = resources.files("autowire.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


__all__ = ["get_data_path"]
