from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List


class CandidateSource(ABC):
    """Supplies the raw candidate names, typically from packaged manifests."""

    @abstractmethod
    def candidates(self) -> List[str]:
        ...


class StaticCandidateSource(CandidateSource):
    def __init__(self, names: Iterable[str]) -> None:
        self._names = list(names)

    def candidates(self) -> List[str]:
        return list(self._names)


__all__ = ["CandidateSource", "StaticCandidateSource"]
