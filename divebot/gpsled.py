"""Status LED that shows how close the GPS is to a usable fix."""

from __future__ import annotations

from divebot.gps import N_SATS_THRESHOLD, GPSState
from divebot.hardware import GPS_LOCK_LED, Board, PinMode


class GPSLockLED:
    """Blinks with a duty cycle set by the satellite count; steady once locked."""

    def __init__(self, board: Board) -> None:
        self._board = board
        self._cycle_num = 0
        self.last_execution_time = -1

    def init(self) -> None:
        """Configure the LED pin as an output."""
        self._board.pin_mode(GPS_LOCK_LED, PinMode.OUTPUT)

    def flash_led(self, gps_state: GPSState) -> None:
        """Advance the blink pattern by one step for the current satellite count."""
        if gps_state.num_sat >= N_SATS_THRESHOLD:
            self._board.digital_write(GPS_LOCK_LED, True)
            return
        if self._cycle_num > N_SATS_THRESHOLD:
            self._cycle_num = 0
        self._board.digital_write(GPS_LOCK_LED, self._cycle_num < gps_state.num_sat)
        self._cycle_num += 1