"""Single-writer ingestion for trees fed by several producers.

:class:`~routeforge.engine.tree.PatternTree` must only ever be mutated by one
thread. :class:`SerialIngestor` puts a queue in front of the tree: any number of
threads may :meth:`~SerialIngestor.submit` paths, and one worker thread drains
the queue into :meth:`~routeforge.engine.tree.PatternTree.analyze`.
"""
from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterable

from .tree import PatternTree

logger = logging.getLogger(__name__)

_STOP = object()


class SerialIngestor:
    """Funnel paths from many threads into a single tree.

    The tree may be read once :meth:`flush` or :meth:`close` has returned and
    no producer is still submitting.

    The worker is a daemon thread: paths still queued when the interpreter
    exits are dropped silently. Always :meth:`close` the ingestor (or use it
    as a context manager) before relying on the tree's contents.
    """

    def __init__(self, tree: PatternTree, maxsize: int = 0, name: str = "routeforge-ingestor") -> None:
        self.tree = tree
        self.processed = 0
        self.failed = 0
        self._queue: queue.Queue[object] = queue.Queue(maxsize)
        self._lock = threading.Lock()
        self._closed = False
        self._worker = threading.Thread(target=self._run, name=name, daemon=True)
        self._worker.start()
        logger.debug("ingestor %s started", name)

    def __enter__(self) -> SerialIngestor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, path: str) -> None:
        if not isinstance(path, str):
            raise TypeError(f"path must be a str, got {type(path).__name__}")
        with self._lock:
            if self._closed:
                raise RuntimeError("ingestor is closed")
            self._queue.put(path)

    def submit_many(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.submit(path)

    def flush(self) -> None:
        """Block until every path submitted so far has been ingested."""
        self._queue.join()

    def close(self) -> None:
        """Stop accepting paths, drain the queue and join the worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._worker.join()
        logger.debug("ingestor %s stopped after %d paths", self._worker.name, self.processed)

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self.tree.analyze(item)
                self.processed += 1
            except Exception:
                self.failed += 1
                logger.exception("failed to ingest %r", item)
            finally:
                self._queue.task_done()
