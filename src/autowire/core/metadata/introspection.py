from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

from autowire.core.exceptions import CandidateNotResolvableError

from .source import parse_names


@dataclass(frozen=True)
class Declarations:
    """Raw ordering declarations read directly from a candidate."""

    priority: Optional[int] = None
    before: Tuple[str, ...] = ()
    after: Tuple[str, ...] = ()


class Introspector(ABC):
    """Fallback used when the metadata table has no record for a name."""

    @abstractmethod
    def declarations(self, name: str) -> Declarations:
        """Return the declarations of ``name``.

        Raises:
            CandidateNotResolvableError: if ``name`` does not resolve to anything
                in the current environment.
        """

    @abstractmethod
    def is_resolvable(self, name: str) -> bool:
        """Whether ``name`` denotes something the environment can materialize."""


class DeclarationIntrospector(Introspector):
    """Introspector backed by a table of declarations.

    ``known`` lists extra identities that exist in the environment but carry
    no ordering declarations (ordinary components, for instance). They
    resolve to empty declarations.
    """

    def __init__(
        self,
        declarations: Optional[Mapping[str, Mapping[str, Any]]] = None,
        *,
        known: Iterable[str] = (),
    ) -> None:
        self._declarations: dict[str, Declarations] = {}
        for name, raw in (declarations or {}).items():
            raw = raw or {}
            priority = raw.get("priority")
            self._declarations[str(name)] = Declarations(
                priority=int(priority) if priority is not None else None,
                before=parse_names(raw.get("before")),
                after=parse_names(raw.get("after")),
            )
        self._known = frozenset(str(n) for n in known)

    def declarations(self, name: str) -> Declarations:
        found = self._declarations.get(name)
        if found is not None:
            return found
        if name in self._known:
            return Declarations()
        raise CandidateNotResolvableError(name)

    def is_resolvable(self, name: str) -> bool:
        return name in self._declarations or name in self._known


__all__ = ["Declarations", "Introspector", "DeclarationIntrospector"]
