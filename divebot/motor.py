"""Raw drive signals for the robot's three motors."""

from __future__ import annotations

import struct

from divebot.datasource import DataSource
from divebot.hardware import (
    MOTOR_A_DIRECTION,
    MOTOR_A_SPEED,
    MOTOR_B_DIRECTION,
    MOTOR_B_SPEED,
    MOTOR_C_DIRECTION,
    MOTOR_C_SPEED,
    Board,
    PinMode,
)

NUM_MOTORS = 3
MOTOR_A_INDEX = 0
MOTOR_B_INDEX = 1
MOTOR_C_INDEX = 2

# the smallest PWM value that actually makes a motor spin
MOTOR_DEADZONE = 34

# (direction pin, speed pin) for each motor
MOTOR_PINS: tuple[tuple[int, int], ...] = (
    (MOTOR_A_DIRECTION, MOTOR_A_SPEED),
    (MOTOR_B_DIRECTION, MOTOR_B_SPEED),
    (MOTOR_C_DIRECTION, MOTOR_C_SPEED),
)

_RECORD = struct.Struct(f"<{NUM_MOTORS}i")
_LABELS = ("PWMA", "PWMB", "PWMC")


def deadzone_pwm(value: int) -> int:
    """Return the PWM magnitude for a command, rescaled past the dead zone.

    Zero stays zero; any other command of magnitude ``m`` maps to
    ``m - MOTOR_DEADZONE * m // 255 + MOTOR_DEADZONE``.
    """
    magnitude = abs(int(value))
    if magnitude == 0:
        return 0
    return magnitude - MOTOR_DEADZONE * magnitude // 255 + MOTOR_DEADZONE


class MotorDriver(DataSource):
    """Turns signed motor commands (-255 to 255) into direction and PWM signals."""

    def __init__(self, board: Board) -> None:
        super().__init__("motorA,motorB,motorC", "int,int,int")
        self._board = board
        self.motor_values: list[int] = [0] * NUM_MOTORS
        self._pwm_values: list[int] = [0] * NUM_MOTORS
        self._pwm_dir: list[bool] = [False] * NUM_MOTORS
        for direction_pin, speed_pin in MOTOR_PINS:
            board.digital_write(direction_pin, False)
            board.analog_write(speed_pin, 0)

    def init(self) -> None:
        """Configure the motor pins as outputs."""
        for direction_pin, speed_pin in MOTOR_PINS:
            self._board.pin_mode(speed_pin, PinMode.OUTPUT)
            self._board.pin_mode(direction_pin, PinMode.OUTPUT)

    def apply(self) -> None:
        """Write the stored motor commands to the pins."""
        self._pwm_dir = [value >= 0 for value in self.motor_values]
        self._pwm_values = [deadzone_pwm(value) for value in self.motor_values]
        for (direction_pin, speed_pin), forward, pwm in zip(
            MOTOR_PINS, self._pwm_dir, self._pwm_values
        ):
            self._board.digital_write(direction_pin, forward)
            self._board.analog_write(speed_pin, pwm)

    def drive(self, motor_a_power: int, motor_b_power: int, motor_c_power: int) -> None:
        """Set all three motor commands and apply them."""
        self.motor_values = [int(motor_a_power), int(motor_b_power), int(motor_c_power)]
        self.apply()

    def print_state(self) -> str:
        """Return the applied PWM signals as one status line."""
        parts = (
            f"{label}: {' ' if forward else '-'}{pwm}"
            for label, forward, pwm in zip(_LABELS, self._pwm_dir, self._pwm_values)
        )
        return "Motors: " + " ".join(parts)

    def data_bytes(self) -> bytes:
        signed = [
            pwm if forward else -pwm
            for forward, pwm in zip(self._pwm_dir, self._pwm_values)
        ]
        return _RECORD.pack(*signed)