"""Rendering helpers for learned pattern trees."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tree import PatternTree


def render_text(tree: PatternTree, indent: str = "   ") -> str:
    """Render one line per node below the root.

    Each line reads ``<segment> (<occurrences>/<parent descents>)`` so the
    significance ratio used for collapsing can be read off directly.
    """
    lines: list[str] = []
    for segments, node, parent in tree.walk():
        if parent is None:
            continue
        lines.append(
            f"{indent * len(segments)}{segments[-1]} ({node.occurrence_count}/{parent.descent_count})"
        )
    return "\n".join(lines)


def tree_to_dict(tree: PatternTree) -> dict[str, object]:
    def _node(node: PatternTree) -> dict[str, object]:
        return {
            "occurrences": node.occurrence_count,
            "descents": node.descent_count,
            "wildcard": node.wildcard_child is not None,
            "children": {key: _node(child) for key, child in node.children.items()},
        }

    return _node(tree)


def summarize_text(tree: PatternTree) -> str:
    templates = sorted(tree.get_all_paths())
    lines = [
        f"INGESTED: {tree.occurrence_count}",
        f"NODES: {tree.node_count()}",
        f"TEMPLATES: {len(templates)}",
    ]
    for template in templates:
        lines.append(f"  {template}")
    return "\n".join(lines)
