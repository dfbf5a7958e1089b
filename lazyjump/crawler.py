"""Background subdirectory enumeration with a fixed-size worker pool."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from queue import Queue

DEFAULT_CRAWL_WORKERS = 8

logger = logging.getLogger(__name__)


def list_subdirectories(dirname: str) -> list[str]:
    """Return absolute paths of the immediate subdirectories of ``dirname``.

    Symlinks are not followed. Raises ``OSError`` when the directory cannot be
    listed.
    """
    out: list[str] = []
    with os.scandir(dirname) as entries:
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    out.append(os.path.join(dirname, entry.name))
            except OSError:
                continue
    out.sort()
    return out


class DirectoryCrawler:
    """Recursively discover directories below ``root`` on daemon threads.

    Each listed directory delivers its subdirectories to ``on_batch`` as one
    list and queues them for enumeration. Workers are never cancelled; they go
    idle once the queue drains, at which point the crawl is complete.
    """

    def __init__(
        self,
        root: str,
        on_batch: Callable[[list[str]], None],
        *,
        workers: int = DEFAULT_CRAWL_WORKERS,
        on_complete: Callable[[], None] | None = None,
        list_dir: Callable[[str], list[str]] = list_subdirectories,
    ) -> None:
        self.root = os.path.abspath(root)
        self._on_batch = on_batch
        self._on_complete = on_complete
        self._list_dir = list_dir
        self._worker_count = max(1, int(workers))
        self._queue: Queue[str] = Queue()
        self._lock = threading.Lock()
        self._outstanding = 0
        self._started = False
        self._done = threading.Event()

    def start(self) -> None:
        """Queue the root directory and spawn the worker pool once."""
        with self._lock:
            if self._started:
                return
            self._started = True
            self._outstanding = 1
        self._queue.put(self.root)
        for idx in range(self._worker_count):
            worker = threading.Thread(
                target=self._worker,
                name=f"lazyjump-crawl-{idx}",
                daemon=True,
            )
            worker.start()

    def is_complete(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the crawl completes; return whether it did."""
        return self._done.wait(timeout)

    def _worker(self) -> None:
        while True:
            dirname = self._queue.get()
            try:
                self._visit(dirname)
            except Exception:
                logger.exception("crawl worker failed on %s", dirname)
            finally:
                self._finish_one()

    def _visit(self, dirname: str) -> None:
        try:
            children = self._list_dir(dirname)
        except OSError as exc:
            logger.debug("skipping unreadable directory %s: %s", dirname, exc)
            return
        if not children:
            return
        with self._lock:
            self._outstanding += len(children)
        try:
            self._on_batch(children)
        finally:
            for child in children:
                self._queue.put(child)

    def _finish_one(self) -> None:
        with self._lock:
            self._outstanding -= 1
            finished = self._outstanding == 0
        if not finished:
            return
        logger.debug("crawl of %s complete", self.root)
        try:
            if self._on_complete is not None:
                self._on_complete()
        finally:
            self._done.set()
