"""Tests for ExclusionResolver: union of sources and validation."""
from __future__ import annotations

import pytest

from autowire.core.exceptions import InvalidExclusionError
from autowire.core.exclusions import ExclusionResolver

CANDIDATES = ["com.example.Web", "com.example.Json", "com.example.Data"]
PRESENT = {"com.example.Web", "com.example.Json", "com.example.Data", "com.example.Service", "com.example.Repo"}


def _resolver(**kwargs) -> ExclusionResolver:
    return ExclusionResolver(is_present=PRESENT.__contains__, **kwargs)


class TestResolve:
    def test_union_of_all_three_sources(self) -> None:
        resolver = _resolver(property_exclusions=["com.example.Data"])
        excluded = resolver.resolve(["com.example.Web"], ["com.example.Json"])
        assert excluded == ["com.example.Web", "com.example.Json", "com.example.Data"]

    def test_duplicates_collapse(self) -> None:
        resolver = _resolver(property_exclusions=["com.example.Web", ""])
        assert resolver.resolve(["com.example.Web"], ["com.example.Web"]) == ["com.example.Web"]

    def test_no_sources_means_nothing_excluded(self) -> None:
        assert _resolver().resolve() == []


class TestCheck:
    def test_excluding_candidates_is_valid(self) -> None:
        _resolver().check(CANDIDATES, ["com.example.Web", "com.example.Data"])

    def test_unresolvable_absent_name_is_ignored(self) -> None:
        """A typo that does not exist anywhere is silently tolerated."""
        _resolver().check(CANDIDATES, ["com.example.Wbe"])

    def test_resolvable_absent_name_is_rejected(self) -> None:
        with pytest.raises(InvalidExclusionError) as exc:
            _resolver().check(CANDIDATES, ["com.example.Service"])
        assert exc.value.exclusions == ["com.example.Service"]
        assert "\t- com.example.Service" in str(exc.value)

    def test_all_offending_names_reported_together(self) -> None:
        with pytest.raises(InvalidExclusionError) as exc:
            _resolver().check(
                CANDIDATES,
                ["com.example.Service", "com.example.Web", "typo", "com.example.Repo"],
            )
        assert exc.value.exclusions == ["com.example.Service", "com.example.Repo"]
        assert exc.value.context["exclusions"] == ["com.example.Service", "com.example.Repo"]

    def test_without_environment_nothing_is_rejected(self) -> None:
        ExclusionResolver().check(CANDIDATES, ["com.example.Service"])
