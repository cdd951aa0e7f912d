"""Logging of the analog input channels."""

from __future__ import annotations

import struct

from divebot.datasource import DataSource
from divebot.hardware import Board, PinMode

NUM_PINS = 16

# A10-A13 are pins 34-37 and A14 is pin 40. A12-A13 and A15-A20 sit on pads
# underneath the board. A10-A14 are not 5 V tolerant.
PIN_MAP: tuple[int, ...] = (
    21, 14, 15, 16, 17, 34, 35, 36, 37, 40, 26, 27, 28, 29, 30, 31,
)

_VAR_NAMES = (
    "Current_Sense,A00,A01,A02,A03,A10,A11,A12,A13,A14,"
    "A15,A16,A17,A18,A19,A20"
)
_DATA_TYPES = ",".join(["int"] * NUM_PINS)
_RECORD = struct.Struct(f"<{NUM_PINS}i")


class ADCSampler(DataSource):
    """Samples every analog channel and logs the raw readings."""

    def __init__(self, board: Board) -> None:
        super().__init__(_VAR_NAMES, _DATA_TYPES)
        self._board = board
        self.sample: list[int] = [0] * NUM_PINS
        self.last_execution_time = -1

    def init(self) -> None:
        """Configure every sampled pin as an input."""
        for pin in PIN_MAP:
            self._board.pin_mode(pin, PinMode.INPUT)

    def update_sample(self) -> None:
        """Read every channel into ``sample``."""
        self.sample = [self._board.analog_read(pin) for pin in PIN_MAP]

    def print_sample(self) -> str:
        """Return the readings as one status line."""
        return "ADC:" + "".join(f" {value}" for value in self.sample)

    def data_bytes(self) -> bytes:
        return _RECORD.pack(*self.sample)