"""Session bootstrap: wires crawler, index, editor, input and rendering.

Threads started here (crawler pool, input reader, render thread) are daemon
threads. They are abandoned rather than joined at session end; the result
index and render coordinator are closed first, so late work is discarded.
"""

from __future__ import annotations

import itertools
import logging
import os

from ..crawler import DEFAULT_CRAWL_WORKERS, DirectoryCrawler
from ..debug_log import install_log_capture, remove_log_capture
from ..input import commands as cmd
from ..input.dispatcher import InputDispatcher
from ..input.mailbox import CommandInbox
from ..query import QueryEditor
from ..render.coordinator import RenderCoordinator
from ..render.frame import Frame, draw_frame
from ..render.surface import AnsiSurface, terminal_size
from ..results import HEADER_ROWS, ResultIndex
from .loop import SessionOutcome, run_event_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def visible_list_rows(tty_fd: int) -> int:
    return max(1, terminal_size(tty_fd)[1] - HEADER_ROWS)


def run_session(
    root: str,
    *,
    tty_fd: int,
    workers: int = DEFAULT_CRAWL_WORKERS,
    debug: bool = False,
) -> SessionOutcome:
    """Run one interactive picker session on ``tty_fd`` rooted at ``root``."""
    root = os.path.abspath(root)
    log_buffer = install_log_capture()
    try:
        terminal = TerminalController(tty_fd)
        surface = AnsiSurface(
            write=lambda data: os.write(tty_fd, data),
            size=lambda: terminal_size(tty_fd),
        )
        inbox = CommandInbox()
        results = ResultIndex(root, lambda: visible_list_rows(tty_fd))
        query = QueryEditor(on_change=results.set_query)
        spinner = itertools.count()

        def paint() -> None:
            text, cursor = query.snapshot()
            debug_lines = log_buffer.drain()
            frame = Frame(
                root=root,
                query=text,
                cursor=cursor,
                results=results.view(),
                debug_lines=debug_lines if debug else [],
                spinner_frame=next(spinner),
            )
            draw_frame(surface, frame)

        def on_render_error(exc: BaseException) -> None:
            inbox.put(cmd.Command(cmd.ERROR, error=exc))

        renderer = RenderCoordinator(paint, on_error=on_render_error)

        def on_batch(batch: list[str]) -> None:
            if results.add_batch(batch):
                renderer.request()

        def on_complete() -> None:
            results.mark_complete()
            renderer.request()

        crawler = DirectoryCrawler(root, on_batch, workers=workers, on_complete=on_complete)
        dispatcher = InputDispatcher.for_fd(inbox, tty_fd)

        logger.debug("session start: root=%s workers=%d", root, workers)
        with terminal.raw_mode():
            try:
                renderer.paint_now()
                renderer.start()
                crawler.start()
                dispatcher.start()
                outcome = run_event_loop(inbox, query, results, renderer.request)
            finally:
                dispatcher.stop()
                renderer.stop()
                results.close()
                inbox.close()
        return outcome
    finally:
        remove_log_capture(log_buffer)
