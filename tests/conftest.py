"""Shared fixtures; also makes ``src/`` importable without installing."""

from __future__ import annotations

import pathlib
import sys
from collections.abc import Callable, Iterable

import pytest

SRC = pathlib.Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from routeforge.engine.tree import PatternTree  # noqa: E402


@pytest.fixture
def tree() -> PatternTree:
    return PatternTree()


@pytest.fixture
def feed() -> Callable[..., PatternTree]:
    """Ingest ``paths`` (each ``times`` over) into ``target`` via ``analyze``."""

    def _feed(target: PatternTree, paths: Iterable[str], times: int = 1) -> PatternTree:
        for path in paths:
            for _ in range(times):
                target.analyze(path)
        return target

    return _feed
