"""Input/output helpers for the routeforge CLI."""
import csv
import json
import os
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO


def _read_text_lines(handle: TextIO) -> list[str]:
    return [line.rstrip("\n\r") for line in handle if line.strip()]


def _read_jsonl(handle: TextIO) -> list[str]:
    data: list[str] = []
    for raw in handle:
        raw = raw.strip()
        if not raw:
            continue
        obj = json.loads(raw)
        if isinstance(obj, dict):
            if "path" not in obj:
                raise ValueError(f"JSON object without a 'path' key: {raw}")
            value = obj["path"]
        else:
            value = obj
        if not isinstance(value, str):
            raise ValueError(f"path must be a JSON string: {raw}")
        data.append(value)
    return data


def _read_csv(handle: TextIO) -> list[str]:
    reader = csv.DictReader(handle)
    fieldnames = reader.fieldnames or []
    for column in ("path", "url"):
        if column in fieldnames:
            return [row[column] for row in reader if row.get(column)]
    raise ValueError("CSV missing required column 'path' (or 'url')")


def _open_path(path: str) -> Iterator[str]:
    if path == "-":
        yield from _read_text_lines(sys.stdin)
        return
    _, ext = os.path.splitext(path)
    ext = ext.lower()
    if ext in {".json", ".jsonl"}:
        with open(path, encoding="utf-8") as handle:
            yield from _read_jsonl(handle)
    elif ext == ".csv":
        with open(path, encoding="utf-8", newline="") as handle:
            yield from _read_csv(handle)
    else:
        with open(path, encoding="utf-8") as handle:
            yield from _read_text_lines(handle)


def read_paths(path: str) -> list[str]:
    return list(_open_path(path))


def read_many(paths: Iterable[str]) -> list[str]:
    items: list[str] = []
    for path in paths:
        items.extend(read_paths(path))
    return items


def write_json(obj: object, path: str) -> None:
    if path == "-":
        json.dump(obj, sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(obj, handle, indent=2, sort_keys=True)
        handle.write("\n")


def write_text(text: str, path: str) -> None:
    if path == "-":
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
        if not text.endswith("\n"):
            handle.write("\n")
