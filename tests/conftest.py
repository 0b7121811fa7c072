import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'autowire'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from autowire.core.candidates import CandidateStore
from autowire.core.config import clear_all_caches
from autowire.core.metadata import DeclarationIntrospector, PrecomputedMetadata


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """Drop AUTOWIRE_* env vars and cached configs around every test."""
    import os

    for key in list(os.environ):
        if key.startswith("AUTOWIRE_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def make_store():
    """Build a CandidateStore from plain dicts.

    ``metadata`` feeds the precomputed table, ``declarations`` the
    introspection fallback and ``known`` names resolvable without
    declarations.
    """

    def _make(
        metadata: Optional[Mapping[str, Dict[str, Any]]] = None,
        declarations: Optional[Mapping[str, Dict[str, Any]]] = None,
        known=(),
    ) -> CandidateStore:
        return CandidateStore.create(
            PrecomputedMetadata(metadata or {}),
            DeclarationIntrospector(declarations or {}, known=known),
        )

    return _make
