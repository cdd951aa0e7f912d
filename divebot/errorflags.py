"""Logging of the H-bridge error flag lines."""

from __future__ import annotations

from divebot.datasource import DataSource
from divebot.hardware import ERROR_FLAG_A, ERROR_FLAG_B, ERROR_FLAG_C, Board, PinMode

NUM_FLAGS = 3
PIN_MAP: tuple[int, ...] = (ERROR_FLAG_A, ERROR_FLAG_B, ERROR_FLAG_C)
_MOTOR_LABELS = ("MotorA: ", " MotorB: ", " MotorC: ")


class ErrorFlagSampler(DataSource):
    """Records the error flag of each motor's H-bridge (flags are active low)."""

    def __init__(self, board: Board) -> None:
        super().__init__("ErrorFlagA,ErrorFlagB,ErrorFlagC", "bool,bool,bool")
        self._board = board
        self.flag_states: list[bool] = [False] * NUM_FLAGS
        self.last_execution_time = -1

    def init(self) -> None:
        """Configure the flag pins as inputs."""
        for pin in PIN_MAP:
            self._board.pin_mode(pin, PinMode.INPUT)

    def update_states(self, efa_state: bool, efb_state: bool, efc_state: bool) -> None:
        """Store the flags from the raw pin levels; a low level raises the flag."""
        self.flag_states = [not efa_state, not efb_state, not efc_state]

    def print_states(self) -> str:
        """Return the flags as one status line."""
        return "Error Flags: " + "".join(
            f"{label}{int(state)}"
            for label, state in zip(_MOTOR_LABELS, self.flag_states)
        )

    def data_bytes(self) -> bytes:
        return bytes(int(state) for state in self.flag_states)