"""Tests for tree rendering helpers."""

from routeforge.engine.explain import render_text, summarize_text, tree_to_dict
from routeforge.engine.tree import PatternTree


def _sample() -> PatternTree:
    tree = PatternTree()
    tree.analyze("foo/bar")
    tree.analyze("foo/bar")
    tree.analyze("foo/baz")
    return tree


def test_render_text_shows_counts() -> None:
    tree = _sample()
    assert render_text(tree).splitlines() == [
        "   foo (3/3)",
        "      bar (2/3)",
        "      baz (1/3)",
    ]
    assert tree.render(indent="  ").splitlines()[1] == "    bar (2/3)"


def test_render_empty_tree() -> None:
    assert render_text(PatternTree()) == ""


def test_tree_to_dict() -> None:
    payload = tree_to_dict(_sample())
    assert payload["occurrences"] == 3
    foo = payload["children"]["foo"]
    assert foo["descents"] == 3
    assert foo["wildcard"] is False
    assert foo["children"]["baz"] == {
        "occurrences": 1,
        "descents": 0,
        "wildcard": False,
        "children": {},
    }


def test_summarize_text() -> None:
    text = summarize_text(_sample())
    assert "INGESTED: 3" in text
    assert "NODES: 4" in text
    assert "TEMPLATES: 2" in text
    assert "  foo/bar" in text
