"""Command line interface for the routeforge template learner."""
from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from . import io
from .engine.explain import render_text, summarize_text, tree_to_dict
from .engine.models import TreeOptions
from .engine.tree import PatternTree

logger = logging.getLogger(__name__)


def _ratio(value: str) -> float:
    """Parse a threshold ratio, ensuring it lies in (0, 1]."""
    try:
        ratio = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ratio: {value}") from None
    if not 0 < ratio <= 1:
        raise argparse.ArgumentTypeError(f"ratio must be in (0, 1]: {value}")
    return ratio


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="routeforge", description="Learn path templates from path streams")
    parser.add_argument("-V", "--version", action="version", version="routeforge 0.1")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    def add_tree_options(cmd: argparse.ArgumentParser) -> None:
        defaults = TreeOptions()
        cmd.add_argument("--separator", default=defaults.separator)
        cmd.add_argument("--wildcard", default=defaults.wildcard)
        cmd.add_argument("--min-significance", type=_ratio, default=defaults.min_node_significance)
        cmd.add_argument("--max-variance", type=_ratio, default=defaults.max_level_variance)
        cmd.add_argument("--input", action="append", required=True, help="path list (txt, jsonl, csv or -)")

    learn = sub.add_parser("learn", help="learn templates from a path list")
    add_tree_options(learn)
    learn.add_argument(
        "--structure-only",
        action="store_true",
        default=False,
        help="insert paths as-is without statistics or collapsing",
    )
    learn.add_argument("--format", choices=["text", "json", "tree", "summary"], default="text")
    learn.add_argument("--out", default="-")

    compare = sub.add_parser("compare", help="check learned templates against an expected structure")
    add_tree_options(compare)
    compare.add_argument("--structure", required=True, help="expected templates, one per line")
    compare.add_argument("--symmetric", action="store_true", default=False)
    compare.add_argument("--format", choices=["text", "json"], default="text")

    resolve = sub.add_parser("resolve", help="map paths onto learned templates")
    add_tree_options(resolve)
    resolve.add_argument("paths", nargs="+")
    resolve.add_argument("--format", choices=["text", "json"], default="text")
    return parser


def _build_options(args: argparse.Namespace) -> TreeOptions:
    try:
        return TreeOptions(
            separator=args.separator,
            wildcard=args.wildcard,
            min_node_significance=args.min_significance,
            max_level_variance=args.max_variance,
        )
    except ValueError as exc:
        raise SystemExit(f"routeforge: error: {exc}") from None


def _learn(args: argparse.Namespace, structure_only: bool = False) -> PatternTree:
    tree = PatternTree(_build_options(args))
    paths = io.read_many(args.input)
    insert = tree.add_to_structure if structure_only else tree.analyze
    for path in paths:
        insert(path)
    logger.info("ingested %d paths into %d nodes", len(paths), tree.node_count())
    return tree


def _command_learn(args: argparse.Namespace) -> int:
    tree = _learn(args, structure_only=args.structure_only)
    templates = sorted(tree.get_all_paths())
    if args.format == "json":
        io.write_json(
            {
                "ingested": tree.occurrence_count,
                "nodes": tree.node_count(),
                "templates": templates,
                "tree": tree_to_dict(tree),
            },
            args.out,
        )
    elif args.format == "tree":
        io.write_text(render_text(tree), args.out)
    elif args.format == "summary":
        io.write_text(summarize_text(tree), args.out)
    else:
        io.write_text("\n".join(templates), args.out)
    return 0


def _command_compare(args: argparse.Namespace) -> int:
    learned = _learn(args)
    expected = PatternTree(learned.options)
    for path in io.read_paths(args.structure):
        expected.add_to_structure(path)
    report = learned.compare_structure(expected, symmetric=args.symmetric)
    if args.format == "json":
        io.write_json(report.to_json(), "-")
    else:
        lines = ["EQUAL" if report.ok else "DIFFERENT"]
        lines.extend(f"MISSING: {path}" for path in report.missing)
        lines.extend(f"EXTRA: {path}" for path in report.extra)
        io.write_text("\n".join(lines), "-")
    return 0 if report.ok else 1


def _command_resolve(args: argparse.Namespace) -> int:
    tree = _learn(args)
    resolved = {path: tree.resolve(path) for path in args.paths}
    if args.format == "json":
        io.write_json(resolved, "-")
    else:
        lines = [f"{path}\t{template if template is not None else '-'}" for path, template in resolved.items()]
        io.write_text("\n".join(lines), "-")
    return 0 if all(template is not None for template in resolved.values()) else 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )
    command = args.command
    if command == "learn":
        return _command_learn(args)
    if command == "compare":
        return _command_compare(args)
    if command == "resolve":
        return _command_resolve(args)
    parser.error(f"unknown command {command}")
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
