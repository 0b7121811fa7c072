"""Exclusion resolution.

Exclusions come from three places: names excluded by identity on the trigger,
names excluded by plain string on the trigger, and the externally configured
``autoconfigure.exclude`` property. The effective set is their union.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from autowire.core.exceptions import InvalidExclusionError


def _never_present(name: str) -> bool:
    return False


class ExclusionResolver:
    """Computes and validates the exclusion set for one trigger.

    ``is_present`` answers whether a name denotes something the current
    environment can materialize. Only such names are checked against the
    candidate pool; anything else (typos, optional integrations that are not
    installed) is ignored.
    """

    def __init__(
        self,
        is_present: Optional[Callable[[str], bool]] = None,
        property_exclusions: Sequence[str] = (),
    ) -> None:
        self.is_present = is_present or _never_present
        self.property_exclusions = list(property_exclusions)

    def resolve(self, exclude: Iterable[str] = (), exclude_name: Iterable[str] = ()) -> List[str]:
        """Union of all three sources, first occurrence order, duplicates collapsed."""
        merged = [*exclude, *exclude_name, *self.property_exclusions]
        return list(dict.fromkeys(name for name in merged if name))

    def check(self, candidates: Iterable[str], exclusions: Iterable[str]) -> None:
        """Reject exclusions that are real identities but not candidates.

        Raises:
            InvalidExclusionError: listing every offending name at once.
        """
        pool = set(candidates)
        invalid = [
            name for name in exclusions if name not in pool and self.is_present(name)
        ]
        if invalid:
            raise InvalidExclusionError(invalid)


__all__ = ["ExclusionResolver"]
