"""Data models shared across the routeforge engine."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TreeOptions:
    """Configuration for a :class:`~routeforge.engine.tree.PatternTree`.

    separator: string splitting a path into segments
    wildcard: marker segment standing for "any value seen at this position"

    min_node_significance: child share of its parent's descents below which the
        child is folded into the wildcard
        - significance = child.occurrence_count / parent.descent_count
        - Example: 0.1 means a child seen on fewer than 10% of descents is a parameter

    max_level_variance: distinct-children to descents ratio at which a level is
        evaluated for collapsing at all
        - variance = len(parent.children) / parent.descent_count
        - Levels with variance strictly below this value are left alone
    """
    separator: str = "/"
    wildcard: str = "*"
    min_node_significance: float = 0.1
    max_level_variance: float = 0.05

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValueError("separator must be a non-empty string")
        if not self.wildcard:
            raise ValueError("wildcard must be a non-empty string")
        if self.separator in self.wildcard:
            raise ValueError(
                f"wildcard {self.wildcard!r} must not contain the separator {self.separator!r}"
            )
        for name in ("min_node_significance", "max_level_variance"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"{name} must be in (0, 1], got {value!r}")


@dataclass
class StructureReport:
    """Outcome of comparing two trees' shapes.

    missing: paths of the other tree that have no counterpart here
    extra: paths of this tree absent from the other (symmetric comparisons only)
    """
    missing: list[str] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)
    symmetric: bool = False

    @property
    def ok(self) -> bool:
        return not self.missing and not self.extra

    def to_json(self) -> dict[str, object]:
        return {
            "equal": self.ok,
            "symmetric": self.symmetric,
            "missing": list(self.missing),
            "extra": list(self.extra),
        }
