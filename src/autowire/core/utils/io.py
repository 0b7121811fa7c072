"""Reading config, metadata and schema files from disk."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

_NO_DEFAULT = object()


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Parse a YAML document with ``yaml.safe_load``.

    A missing file, an unreadable or non-UTF-8 file, a parse error or an
    empty document all yield ``default``. With ``raise_on_error`` the first
    three propagate instead (``OSError``, ``UnicodeDecodeError``,
    ``yaml.YAMLError``).
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        if raise_on_error:
            raise
        return default
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        if raise_on_error:
            raise
        return default
    return default if data is None else data


def read_json(path: Path | str, *, default: Any = _NO_DEFAULT) -> Any:
    """Load a JSON file; a missing file raises unless ``default`` is given."""
    path = Path(path)
    if not path.is_file() and default is not _NO_DEFAULT:
        return default
    return json.loads(path.read_text(encoding="utf-8"))


def iter_yaml_files(directory: Path) -> List[Path]:
    """``*.yaml`` and ``*.yml`` files in ``directory``, sorted by stem.

    A ``.yaml`` file shadows a ``.yml`` file with the same stem.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    by_stem: Dict[str, Path] = {}
    for suffix in ("yml", "yaml"):
        for path in directory.glob(f"*.{suffix}"):
            by_stem[path.stem] = path
    return [by_stem[stem] for stem in sorted(by_stem)]


__all__ = ["read_yaml", "read_json", "iter_yaml_files"]
