"""Tests for structural comparison between learned and reference trees."""

import uuid

from routeforge.engine.models import StructureReport
from routeforge.engine.tree import PatternTree


def _structure(*paths: str) -> PatternTree:
    tree = PatternTree()
    for path in paths:
        tree.add_to_structure(path)
    return tree


def test_learned_tree_contains_reference_with_wildcard() -> None:
    expected = _structure("foo/bar/*/quo/roo", "foo/beer/baz/quo")
    learned = PatternTree()
    for _ in range(30):
        learned.analyze(f"foo/bar/{uuid.uuid4().hex}/quo/roo")
        learned.analyze("foo/beer/baz/quo")

    assert learned.equal_structure(expected)
    assert set(learned.get_all_paths()) == {"foo/bar/*/quo/roo", "foo/beer/baz/quo"}
    assert learned.compare_structure(expected, symmetric=True).ok


def test_containment_is_one_directional() -> None:
    full = _structure("a/b", "a/c")
    partial = _structure("a/b")
    assert full.equal_structure(partial)
    assert not partial.equal_structure(full)


def test_compare_reports_missing_and_extra() -> None:
    left = _structure("a/b", "a/c")
    right = _structure("a/b", "x/y")

    one_way = left.compare_structure(right)
    assert one_way.missing == ["x"]
    assert one_way.extra == []
    assert not one_way.ok

    both_ways = left.compare_structure(right, symmetric=True)
    assert both_ways.missing == ["x"]
    assert both_ways.extra == ["a/c"]
    assert both_ways.to_json() == {
        "equal": False,
        "symmetric": True,
        "missing": ["x"],
        "extra": ["a/c"],
    }


def test_missing_paths_stop_at_first_gap() -> None:
    learned = _structure("api/users")
    expected = _structure("api/orders/*/items", "api/orders/*/total")
    assert learned.compare_structure(expected).missing == ["api/orders"]


def test_identical_structures_are_equal() -> None:
    paths = ("a/b/c", "a/d", "e")
    report = _structure(*paths).compare_structure(_structure(*paths), symmetric=True)
    assert report == StructureReport(symmetric=True)
    assert report.ok
