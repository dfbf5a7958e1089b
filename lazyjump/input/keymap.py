"""Keyboard token to command mapping."""

from __future__ import annotations

from . import commands as cmd

KEY_COMMANDS: dict[str, str] = {
    "ENTER": cmd.CONFIRM,
    "ESC": cmd.CANCEL,
    "CTRL_C": cmd.CANCEL,
    "LEFT": cmd.CURSOR_LEFT,
    "CTRL_B": cmd.CURSOR_LEFT,
    "RIGHT": cmd.CURSOR_RIGHT,
    "CTRL_F": cmd.CURSOR_RIGHT,
    "ALT_LEFT": cmd.CURSOR_WORD_LEFT,
    "ALT_RIGHT": cmd.CURSOR_WORD_RIGHT,
    "BACKSPACE": cmd.DELETE_BACKWARD,
    "ALT_BACKSPACE": cmd.DELETE_WORD_BACKWARD,
    "DELETE": cmd.DELETE_FORWARD,
    "CTRL_D": cmd.DELETE_FORWARD,
    "UP": cmd.SELECTION_UP,
    "DOWN": cmd.SELECTION_DOWN,
}


def command_for_key(key: str) -> cmd.Command | None:
    """Translate a non-mouse key token; unknown keys map to ``None``."""
    kind = KEY_COMMANDS.get(key)
    if kind is not None:
        return cmd.Command(kind)
    if len(key) == 1 and key.isprintable():
        return cmd.Command(cmd.INSERT_CHAR, char=key)
    return None
