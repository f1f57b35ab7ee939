"""Adaptive pattern tree that learns path templates from a stream of paths.

The root node stands for the forest of every hierarchy seen so far; its
children are the first segments of the ingested paths. Each node counts how
many paths reached it (``occurrence_count``) and how many continued past it
(``descent_count``).

Ingestion (:meth:`PatternTree.analyze`) runs in two phases:

1. Walk down the tree, incrementing counters and creating missing nodes.
2. Walk back up, evaluating every visited level for collapse. A level whose
   variance (distinct children / descents) reaches ``max_level_variance`` has
   its insignificant children (occurrences / descents below
   ``min_node_significance``) folded into the wildcard child:

   a. the merged node's counters are added to the wildcard's counters
   b. children missing from the wildcard are adopted by reference
   c. children present on both sides are merged recursively

Collapsing is irreversible. Once a node has a wildcard child, any segment it
has not seen as a literal key is routed into the wildcard.

Concurrency
-----------
A tree is not safe for concurrent use. Exactly one thread may call
:meth:`~PatternTree.analyze` or :meth:`~PatternTree.add_to_structure`, and
read-only traversals must not overlap with those calls. Feed several
producers through :class:`routeforge.engine.feeder.SerialIngestor`.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator

from .models import StructureReport, TreeOptions
from .segments import join_path, split_path

logger = logging.getLogger(__name__)


class PatternTree:
    __slots__ = ("options", "occurrence_count", "descent_count", "children", "_wildcard")

    def __init__(self, options: TreeOptions | None = None) -> None:
        self.options = options if options is not None else TreeOptions()
        self.occurrence_count = 0
        self.descent_count = 0
        self.children: dict[str, PatternTree] = {}
        self._wildcard: PatternTree | None = None

    def __repr__(self) -> str:  # pragma: no cover - debug convenience
        return (
            f"PatternTree(occurrences={self.occurrence_count}, "
            f"descents={self.descent_count}, children={list(self.children)})"
        )

    @property
    def wildcard_child(self) -> PatternTree | None:
        """The child absorbing collapsed siblings, also stored under the wildcard key."""
        return self._wildcard

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def analyze(self, path: str) -> None:
        """Ingest one occurrence of ``path``, collapsing high-variance levels."""
        visited: list[PatternTree] = []
        node = self
        for segment in split_path(path, self.options.separator):
            node.occurrence_count += 1
            node.descent_count += 1
            visited.append(node)
            node = node._get_or_create_child(segment)
        node.occurrence_count += 1
        # bottom-up: deeper levels settle before their parents are evaluated
        for node in reversed(visited):
            node.collapse_children()

    def add_to_structure(self, path: str) -> None:
        """Insert the shape of ``path`` without touching any counters.

        Used to build reference trees. A wildcard marker segment is stored as a
        plain key here, so literal siblings may still be added next to it.
        """
        node = self
        for segment in split_path(path, self.options.separator):
            node = node._get_or_create_child(segment)

    def _get_or_create_child(self, key: str) -> PatternTree:
        child = self.children.get(key)
        if child is None:
            child = self._wildcard
            if child is None:
                child = PatternTree(self.options)
                self.children[key] = child
        return child

    # ------------------------------------------------------------------
    # Collapse and merge
    # ------------------------------------------------------------------

    def collapse_children(self) -> int:
        """Fold this node's insignificant children into its wildcard child.

        Only the immediate children are evaluated. Returns the number of
        children that were folded; a literal wildcard key promoted in place
        is not counted.
        """
        descents = self.descent_count
        if not descents:
            return 0
        options = self.options
        variance = len(self.children) / descents
        if variance < options.max_level_variance:
            return 0

        # keys are collected first; the map is mutated only after the scan
        insignificant = [
            key
            for key, child in self.children.items()
            if child is not self._wildcard
            and child.occurrence_count / descents < options.min_node_significance
        ]
        if not insignificant:
            return 0

        wildcard = self._ensure_wildcard()
        folded = 0
        for key in insignificant:
            if self.children[key] is wildcard:
                continue
            wildcard.merge(self.children.pop(key))
            folded += 1
        logger.debug(
            "collapsed %d children into %r (variance %.3f over %d descents)",
            folded,
            options.wildcard,
            variance,
            descents,
        )
        return folded

    def _ensure_wildcard(self) -> PatternTree:
        if self._wildcard is None:
            marker = self.options.wildcard
            # a literal key equal to the marker becomes the wildcard rather than being overwritten
            wildcard = self.children.get(marker)
            if wildcard is None:
                wildcard = PatternTree(self.options)
                self.children[marker] = wildcard
            self._wildcard = wildcard
        return self._wildcard

    def merge(self, other: PatternTree) -> None:
        """Fold the detached subtree ``other`` into this node.

        Counters are summed; children missing here are adopted by reference and
        children present on both sides are merged pairwise, to any depth.
        ``other`` is emptied afterwards and must not be used again. Both trees
        must be configured with equal options; adopted nodes take this
        tree's options object.
        """
        if other is self:
            raise ValueError("cannot merge a tree into itself")
        options = self.options
        if other.options != options:
            raise ValueError(f"cannot merge trees with different options: {other.options!r} != {options!r}")
        rebind = other.options is not options
        marker = options.wildcard
        pending = [(self, other)]
        while pending:
            target, source = pending.pop()
            target.occurrence_count += source.occurrence_count
            target.descent_count += source.descent_count
            for key, source_child in source.children.items():
                target_child = target.children.get(key)
                if target_child is None:
                    target.children[key] = source_child
                    if rebind:
                        for _, node, _ in source_child.walk():
                            node.options = options
                else:
                    pending.append((target_child, source_child))
            if target._wildcard is None and source._wildcard is not None:
                target._wildcard = target.children[marker]
            source.children = {}
            source._wildcard = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def walk(self) -> Iterator[tuple[tuple[str, ...], PatternTree, PatternTree | None]]:
        """Yield ``(segments, node, parent)`` in depth-first pre-order, root first."""
        stack: list[tuple[tuple[str, ...], PatternTree, PatternTree | None]] = [((), self, None)]
        while stack:
            segments, node, parent = stack.pop()
            yield segments, node, parent
            for key, child in reversed(node.children.items()):
                stack.append((segments + (key,), child, node))

    def get_all_paths(self) -> list[str]:
        """Return every root-to-leaf path joined by the separator.

        An empty tree has no paths. Order follows child insertion order.
        """
        if not self.children:
            return []
        separator = self.options.separator
        return [join_path(segments, separator) for segments, node, _ in self.walk() if not node.children]

    def node_count(self) -> int:
        return sum(1 for _ in self.walk())

    def resolve(self, path: str) -> str | None:
        """Return the learned template matching ``path`` without mutating the tree.

        Literal children win over the wildcard. ``None`` means some segment has
        no route.
        """
        options = self.options
        node = self
        template: list[str] = []
        for segment in split_path(path, options.separator):
            child = node.children.get(segment)
            if child is not None:
                template.append(segment)
            elif node._wildcard is not None:
                child = node._wildcard
                template.append(options.wildcard)
            else:
                return None
            node = child
        return join_path(template, options.separator)

    def compare_structure(self, other: PatternTree, symmetric: bool = False) -> StructureReport:
        """Compare shapes key by key.

        ``missing`` lists the shortest paths of ``other`` that have no
        counterpart here. With ``symmetric=True``, ``extra`` lists the paths
        of this tree absent from ``other``.
        """
        separator = self.options.separator
        report = StructureReport(missing=_missing_paths(self, other, separator), symmetric=symmetric)
        if symmetric:
            report.extra = _missing_paths(other, self, separator)
        return report

    def equal_structure(self, other: PatternTree) -> bool:
        """Whether every path of ``other`` exists here (one-directional containment)."""
        report = self.compare_structure(other)
        for path in report.missing:
            logger.debug("cannot find path %s", path)
        return report.ok

    def render(self, indent: str = "   ") -> str:
        from .explain import render_text

        return render_text(self, indent=indent)


def _missing_paths(tree: PatternTree, reference: PatternTree, separator: str) -> list[str]:
    """Paths of ``reference`` with no counterpart in ``tree``; descent stops at the first gap."""
    missing: list[str] = []
    stack = [(tree, reference, ())]
    while stack:
        node, ref, segments = stack.pop()
        for key, ref_child in ref.children.items():
            path = segments + (key,)
            node_child = node.children.get(key)
            if node_child is None:
                missing.append(join_path(path, separator))
            else:
                stack.append((node_child, ref_child, path))
    return sorted(missing)
