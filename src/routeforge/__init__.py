"""routeforge path template learning toolkit."""

from collections.abc import Sequence

from .engine.feeder import SerialIngestor
from .engine.models import StructureReport, TreeOptions
from .engine.tree import PatternTree


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point mirroring :func:`routeforge.cli.main`."""

    from .cli import main as cli_main

    return cli_main(argv)


__all__ = ["main", "PatternTree", "TreeOptions", "StructureReport", "SerialIngestor"]
