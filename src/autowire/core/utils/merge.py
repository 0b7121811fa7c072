"""Deep merge used when layering configuration files.

Lists follow override semantics so that an exclusion list in a project file
replaces the bundled one unless it opts into appending:

- ``["+", "a", "b"]`` appends ``a`` and ``b`` to the lower layer
- ``["=", "a"]`` replaces explicitly
- any other list replaces
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = merge_arrays(current, value)
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists honoring the ``+``/``=`` marker in ``override[0]``.

    Example:
        >>> merge_arrays([1, 2], ["+", 3])
        [1, 2, 3]
        >>> merge_arrays([1, 2], [3])
        [3]
    """
    if not override:
        return base
    marker = override[0]
    if marker == "+":
        return [*base, *override[1:]]
    if marker == "=":
        return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
