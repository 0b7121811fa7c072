from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


class AutowireError(Exception):
    """Base exception for the resolution engine."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidExclusionError(AutowireError, ValueError):
    """Raised when resolvable names are excluded but are not candidates.

    Every offending name is reported at once via ``exclusions``.
    """

    def __init__(self, exclusions: Iterable[str], *, context: Mapping[str, Any] | None = None) -> None:
        self.exclusions = list(exclusions)
        lines = "".join(f"\t- {name}\n" for name in self.exclusions)
        message = (
            "The following names could not be excluded because they are not "
            f"auto-configuration candidates:\n{lines}"
        )
        ctx = dict(context or {})
        ctx["exclusions"] = list(self.exclusions)
        AutowireError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class ConstraintCycleError(AutowireError, RuntimeError):
    """Raised when before/after constraints form a cycle."""

    def __init__(self, current: str, dependency: str, *, context: Mapping[str, Any] | None = None) -> None:
        self.current = current
        self.dependency = dependency
        message = f"Auto-configuration cycle detected between {current} and {dependency}"
        ctx = dict(context or {})
        ctx.update({"current": current, "dependency": dependency})
        AutowireError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


class MissingCandidateSourceError(AutowireError, LookupError):
    """Raised when candidate discovery yields no names at all."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        AutowireError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class CandidateNotResolvableError(AutowireError, LookupError):
    """Raised by introspectors when a name cannot be resolved."""

    def __init__(self, name: str, *, context: Mapping[str, Any] | None = None) -> None:
        self.name = name
        message = f"Unable to read ordering declarations for {name}"
        ctx = dict(context or {})
        ctx["name"] = name
        AutowireError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)


class FilterContractError(AutowireError, ValueError):
    """Raised when an admission filter breaks the positional mask contract."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        AutowireError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(AutowireError, ValueError):
    """Raised when layered configuration cannot be loaded or is invalid."""

    def __init__(self, message: str = "", *, path: str | None = None, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        AutowireError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class ManifestError(AutowireError, ValueError):
    """Raised when a session manifest cannot be loaded or fails validation."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        issues: Iterable[str] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        self.issues = list(issues or [])
        if self.issues:
            ctx["issues"] = list(self.issues)
        AutowireError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


__all__ = [
    "AutowireError",
    "InvalidExclusionError",
    "ConstraintCycleError",
    "MissingCandidateSourceError",
    "CandidateNotResolvableError",
    "FilterContractError",
    "ConfigError",
    "ManifestError",
]
