"""Single-consumer repaint scheduling."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

RENDER_DEBOUNCE_SECONDS = 0.01

logger = logging.getLogger(__name__)


class RenderCoordinator:
    """Coalesce repaint requests onto one background render thread.

    ``request`` only raises a dirty flag, so callers never block on drawing.
    The render thread waits for the flag, lets a short debounce window absorb
    bursts, clears the flag and paints. A request made while a paint is in
    progress re-raises the flag, so the last request is always followed by a
    complete paint. All paints, including ``paint_now``, hold one lock.
    """

    def __init__(
        self,
        paint: Callable[[], None],
        *,
        debounce_seconds: float = RENDER_DEBOUNCE_SECONDS,
        on_error: Callable[[BaseException], None] | None = None,
    ) -> None:
        self._paint = paint
        self._on_error = on_error
        self._debounce_seconds = debounce_seconds
        self._dirty = threading.Event()
        self._paint_lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None
        self._error: BaseException | None = None
        self.paint_count = 0

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._worker, name="lazyjump-render", daemon=True)
        self._thread.start()

    def request(self) -> None:
        if not self._stopped.is_set():
            self._dirty.set()

    def paint_now(self) -> None:
        """Paint synchronously on the calling thread."""
        with self._paint_lock:
            if self._stopped.is_set():
                return
            self._paint()
            self.paint_count += 1

    def stop(self) -> None:
        """Stop painting; pending and later requests are dropped."""
        with self._paint_lock:
            self._stopped.set()
        self._dirty.set()

    @property
    def error(self) -> BaseException | None:
        """The error that ended the render thread, if any."""
        return self._error

    def _worker(self) -> None:
        while True:
            self._dirty.wait()
            if self._stopped.is_set():
                return
            if self._debounce_seconds > 0:
                time.sleep(self._debounce_seconds)
            self._dirty.clear()
            try:
                self.paint_now()
            except OSError as exc:
                logger.debug("render stopped: %s", exc)
                self._error = exc
                if self._on_error is not None:
                    self._on_error(exc)
                return
            except Exception as exc:
                logger.exception("render failed")
                self._error = exc
                if self._on_error is not None:
                    self._on_error(exc)
                return
