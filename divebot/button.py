"""Logging of the onboard push button."""

from __future__ import annotations

from divebot.datasource import DataSource
from divebot.hardware import USER_BUTTON, Board, PinMode


class ButtonSampler(DataSource):
    """Tracks whether the user button is pressed."""

    def __init__(self, board: Board) -> None:
        super().__init__("Button", "bool")
        self._board = board
        self.button_state = False
        self.last_execution_time = -1

    def init(self) -> None:
        """Pull the button pin up so it reads high while released."""
        self._board.pin_mode(USER_BUTTON, PinMode.INPUT_PULLUP)

    def update_state(self) -> None:
        """Read the button: a low pin means pressed."""
        self.button_state = not self._board.digital_read(USER_BUTTON)

    def print_state(self) -> str:
        """Return the button state as one status line."""
        return f"Button: {int(self.button_state)}"

    def data_bytes(self) -> bytes:
        return bytes([int(self.button_state)])