"""Input-layer public API: key decoding, commands and their delivery."""

from .commands import Command
from .dispatcher import InputDispatcher
from .gestures import MouseGestureTracker
from .keymap import command_for_key
from .mailbox import CommandInbox
from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, read_key

__all__ = [
    "read_key",
    "UNKNOWN_KEY",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Command",
    "CommandInbox",
    "InputDispatcher",
    "MouseGestureTracker",
    "command_for_key",
]
