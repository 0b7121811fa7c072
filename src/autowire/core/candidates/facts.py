from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

HIGHEST_PRIORITY = -(2**31)
LOWEST_PRIORITY = 2**31 - 1
DEFAULT_PRIORITY = 0


@dataclass(frozen=True)
class OrderingFacts:
    """What is known about where a candidate sits in the activation order.

    ``before`` names candidates that must come after this one, ``after``
    names candidates that must come before it. Lower ``priority`` sorts
    earlier.
    """

    name: str
    priority: int = DEFAULT_PRIORITY
    before: Tuple[str, ...] = ()
    after: Tuple[str, ...] = ()
    available: bool = True
    precomputed: bool = False

    @classmethod
    def unavailable(cls, name: str) -> "OrderingFacts":
        return cls(name=name, available=False)


__all__ = ["OrderingFacts", "DEFAULT_PRIORITY", "HIGHEST_PRIORITY", "LOWEST_PRIORITY"]
