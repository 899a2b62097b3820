"""
Input handling for BananaLike.
Reads raw key presses from the terminal and maps them to game events.
"""

from typing import Optional, Tuple
from dataclasses import dataclass
import codecs
import os
import sys
import select
import termios
import time


from config import CONFIG

ESCAPE_SEQUENCES = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


@dataclass
class InputEvent:
    """Represents an input event."""

    key: str
    action_type: str = ""
    dx: int = 0
    dy: int = 0
    timestamp: float = 0.0


def split_key(data: str, final: bool = True) -> Tuple[str, str]:
    """
    Split the first key off raw terminal input.

    Returns (key name, remaining input). Arrow keys arrive as ESC [ A..D
    (or ESC O A..D in application mode) and decode to up/down/right/left; a
    lone ESC decodes to "escape". Other CSI sequences decode to "unknown".

    With final=False an escape sequence still missing its last byte is not
    decoded: the key is "" and all of `data` is returned as the remainder.
    """
    if not data:
        return "", ""

    if data[0] != "\x1b":
        return data[0], data[1:]

    if len(data) == 1:
        return ("escape", "") if final else ("", data)

    if data[1] not in "[O":
        return "escape", data[1:]

    # Consume up to and including the final letter of the sequence
    for end in range(2, len(data)):
        if data[end].isalpha() or data[end] == "~":
            return ESCAPE_SEQUENCES.get(data[end], "unknown"), data[end + 1 :]
    return ("unknown", "") if final else ("", data)


class InputHandler:
    """Handles keyboard input for the game."""

    read_size = 32

    def __init__(self):
        if sys.stdin.isatty():
            self.stdin_fd = sys.stdin.fileno()
            self.old_settings = termios.tcgetattr(self.stdin_fd)
            self.is_tty = True
            self.setup_terminal()
        else:
            self.stdin_fd = None
            self.old_settings = None
            self.is_tty = False

        # Bytes read but not yet turned into events
        self._pending = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

        # Load controls
        self.movement_map = CONFIG.controls.get("movement", {})
        self.action_map = CONFIG.controls.get("actions", {})

    def setup_terminal(self):
        """Setup terminal for raw input."""
        if not self.is_tty:
            return
        new_settings = termios.tcgetattr(self.stdin_fd)
        new_settings[3] = new_settings[3] & ~(termios.ECHO | termios.ICANON)
        termios.tcsetattr(self.stdin_fd, termios.TCSADRAIN, new_settings)

    def restore_terminal(self):
        """Restore terminal to original settings."""
        if not self.is_tty or self.old_settings is None:
            return
        termios.tcsetattr(self.stdin_fd, termios.TCSADRAIN, self.old_settings)

    def _map_key_to_event(self, key: str) -> Optional[InputEvent]:
        """Map a decoded key name to an InputEvent."""
        if not key:
            return None

        if key in self.movement_map:
            dx, dy = self.movement_map[key]
            return InputEvent(
                key=key, action_type="move", dx=dx, dy=dy, timestamp=time.time()
            )

        if key in self.action_map:
            action = self.action_map[key]
            return InputEvent(key=key, action_type=action, timestamp=time.time())

        return InputEvent(key=key, action_type="unknown", timestamp=time.time())

    def get_input_non_blocking(self) -> Optional[InputEvent]:
        """Get at most one key press without blocking execution."""
        key, rest = split_key(self._pending, final=False)

        # Keep reading while the buffered input ends in a partial escape sequence
        while not key and self.stdin_fd is not None:
            readable, _, _ = select.select([self.stdin_fd], [], [], 0)
            if not readable:
                break
            chunk = os.read(self.stdin_fd, self.read_size)
            if not chunk:
                break
            self._pending += self._decoder.decode(chunk)
            key, rest = split_key(self._pending, final=False)

        if not key:
            # Nothing else is waiting, so a buffered lone ESC is a real key press
            key, rest = split_key(self._pending)

        self._pending = rest
        return self._map_key_to_event(key)

    def check_for_input(self) -> Optional[InputEvent]:
        """Alias for get_input_non_blocking to match GameEngine usage."""
        return self.get_input_non_blocking()

    def __del__(self):
        """Cleanup when the handler is destroyed."""
        self.restore_terminal()
