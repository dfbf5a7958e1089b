"""Sequential command loop applying input to the query and results.

The loop only routes commands; editing and selection logic live in
``QueryEditor`` and ``ResultIndex``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..input import commands as cmd
from ..input.commands import Command
from ..input.mailbox import CommandInbox
from ..query import QueryEditor
from ..results import ResultIndex

DEFAULT_OUTPUT = "."

OUTCOME_CONFIRM = "confirm"
OUTCOME_CANCEL = "cancel"
OUTCOME_ERROR = "error"


@dataclass(frozen=True)
class SessionOutcome:
    """How a session ended and which directory, if any, was chosen."""

    kind: str
    path: str | None = None
    error: BaseException | None = None

    @property
    def output(self) -> str:
        """Text written to stdout: the chosen path, else the current directory."""
        if self.kind == OUTCOME_CONFIRM and self.path:
            return self.path
        return DEFAULT_OUTPUT


_QUERY_OPS: dict[str, Callable[[QueryEditor], bool]] = {
    cmd.DELETE_BACKWARD: QueryEditor.delete_backward,
    cmd.DELETE_FORWARD: QueryEditor.delete_forward,
    cmd.DELETE_WORD_BACKWARD: QueryEditor.delete_word_backward,
    cmd.CURSOR_LEFT: QueryEditor.move_cursor_left,
    cmd.CURSOR_RIGHT: QueryEditor.move_cursor_right,
    cmd.CURSOR_WORD_LEFT: QueryEditor.move_cursor_word_left,
    cmd.CURSOR_WORD_RIGHT: QueryEditor.move_cursor_word_right,
}

_RESULTS_OPS: dict[str, Callable[[ResultIndex], bool]] = {
    cmd.SELECTION_UP: ResultIndex.move_selection_up,
    cmd.SELECTION_DOWN: ResultIndex.move_selection_down,
    cmd.SCROLL_UP: ResultIndex.scroll_up,
    cmd.SCROLL_DOWN: ResultIndex.scroll_down,
}


def apply_command(command: Command, query: QueryEditor, results: ResultIndex) -> SessionOutcome | None:
    """Apply one command; return an outcome when it ends the session."""
    kind = command.kind
    if kind == cmd.CONFIRM:
        return SessionOutcome(OUTCOME_CONFIRM, results.selected_path())
    if kind == cmd.CANCEL:
        return SessionOutcome(OUTCOME_CANCEL)
    if kind == cmd.ERROR:
        return SessionOutcome(OUTCOME_ERROR, error=command.error)

    if kind == cmd.INSERT_CHAR:
        query.insert_char(command.char)
    elif kind in _QUERY_OPS:
        _QUERY_OPS[kind](query)
    elif kind in _RESULTS_OPS:
        _RESULTS_OPS[kind](results)
    elif kind in {cmd.MOUSE_PRESS, cmd.MOUSE_DRAG}:
        results.mouse_press(command.row)
    elif kind == cmd.MOUSE_CLICK:
        if results.mouse_click(command.col, command.row):
            return SessionOutcome(OUTCOME_CONFIRM, results.selected_path())
    return None


def run_event_loop(
    inbox: CommandInbox,
    query: QueryEditor,
    results: ResultIndex,
    request_render: Callable[[], None],
) -> SessionOutcome:
    """Consume commands until one confirms, cancels or reports an error."""
    while True:
        command = inbox.get()
        if command is None:
            return SessionOutcome(OUTCOME_CANCEL)
        outcome = apply_command(command, query, results)
        if outcome is not None:
            return outcome
        request_render()
