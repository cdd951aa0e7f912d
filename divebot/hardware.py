"""Pin assignments, loop timing and the board interface the components drive."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

# User interface
GPS_LOCK_LED = 20
USER_BUTTON = 2

# Motherboard version 3: H-bridge driver, IN1 direction, IN2 speed
MOTOR_A_DIRECTION = 4
MOTOR_A_SPEED = 3
MOTOR_B_DIRECTION = 6
MOTOR_B_SPEED = 5
MOTOR_C_DIRECTION = 22
MOTOR_C_SPEED = 23

# Motherboard version 2.2 and earlier: half-bridge driver
MOTOR_A_FORWARD = 3
MOTOR_A_REVERSE = 4
MOTOR_B_FORWARD = 5
MOTOR_B_REVERSE = 6
MOTOR_C_FORWARD = 23
MOTOR_C_REVERSE = 22

# Error flags
ERROR_FLAG_A = 7
ERROR_FLAG_B = 8
ERROR_FLAG_C = 9

# Time of flight
SPEAKER_PIN = 20
MIC_PIN = 23

# Depth control (board pin A00)
PRESSURE_PIN = 14

# Loop timing, all in milliseconds: offsets place tasks within a loop period
LOOP_PERIOD = 99
PRINTER_LOOP_OFFSET = 0
IMU_LOOP_OFFSET = 10
GPS_LOOP_OFFSET = 20
ADC_LOOP_OFFSET = 30
ERROR_FLAG_LOOP_OFFSET = 40
BUTTON_LOOP_OFFSET = 45
XY_STATE_ESTIMATOR_LOOP_OFFSET = 50
Z_STATE_ESTIMATOR_LOOP_OFFSET = 55
DEPTH_CONTROL_LOOP_OFFSET = 60
SURFACE_CONTROL_LOOP_OFFSET = 65
LED_LOOP_OFFSET = 70
LOGGER_LOOP_OFFSET = 75


class PinMode(Enum):
    """Electrical configuration of a pin."""

    INPUT = "input"
    OUTPUT = "output"
    INPUT_PULLUP = "input_pullup"


class Board(ABC):
    """The pin-level operations a microcontroller board offers."""

    @abstractmethod
    def pin_mode(self, pin: int, mode: PinMode) -> None:
        """Configure ``pin`` as input, output or pulled-up input."""

    @abstractmethod
    def digital_read(self, pin: int) -> bool:
        """Return True when ``pin`` reads high."""

    @abstractmethod
    def digital_write(self, pin: int, value: bool) -> None:
        """Drive ``pin`` high or low."""

    @abstractmethod
    def analog_read(self, pin: int) -> int:
        """Return the raw ADC reading of ``pin``."""

    @abstractmethod
    def analog_write(self, pin: int, value: int) -> None:
        """Set the PWM duty value on ``pin``."""


class SimulatedBoard(Board):
    """An in-memory board: inputs are set by hand, outputs are recorded."""

    def __init__(self) -> None:
        self._modes: dict[int, PinMode] = {}
        self._inputs: dict[int, int] = {}
        self._outputs: dict[int, int] = {}

    def pin_mode(self, pin: int, mode: PinMode) -> None:
        self._modes[pin] = PinMode(mode)

    def digital_read(self, pin: int) -> bool:
        if pin in self._inputs:
            return bool(self._inputs[pin])
        # an unconnected pulled-up pin floats high
        return self._modes.get(pin) is PinMode.INPUT_PULLUP

    def digital_write(self, pin: int, value: bool) -> None:
        self._outputs[pin] = 1 if value else 0

    def analog_read(self, pin: int) -> int:
        return int(self._inputs.get(pin, 0))

    def analog_write(self, pin: int, value: int) -> None:
        self._outputs[pin] = int(value)

    def set_input(self, pin: int, value: int) -> None:
        """Set the level or raw reading that ``pin`` will report."""
        self._inputs[pin] = int(value)

    def output(self, pin: int) -> int:
        """Return the last value written to ``pin``."""
        try:
            return self._outputs[pin]
        except KeyError:
            raise KeyError(f"nothing has been written to pin {pin}") from None