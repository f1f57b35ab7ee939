"""Tests for data models."""

import dataclasses

import pytest

from routeforge.engine.models import StructureReport, TreeOptions


def test_tree_options_defaults() -> None:
    options = TreeOptions()
    assert options.separator == "/"
    assert options.wildcard == "*"
    assert options.min_node_significance == 0.1
    assert options.max_level_variance == 0.05


def test_tree_options_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        TreeOptions().separator = "."  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"separator": ""},
        {"wildcard": ""},
        {"wildcard": "a/b"},
        {"min_node_significance": 0},
        {"min_node_significance": 1.5},
        {"max_level_variance": -0.1},
    ],
)
def test_tree_options_validation(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        TreeOptions(**kwargs)


def test_structure_report_ok() -> None:
    assert StructureReport().ok
    assert not StructureReport(missing=["a"]).ok
    assert not StructureReport(extra=["b"], symmetric=True).ok
