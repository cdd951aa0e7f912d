"""Depth estimate from the pressure sensor."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from divebot.datasource import DataSource
from divebot.printer import Printer

# pressure sensor calibration: depth [m] = slope * volts + intercept
DEPTH_CAL_SLOPE = -2.81
DEPTH_CAL_INTERCEPT = 7.97

ADC_MAX = 1023
ADC_REFERENCE_VOLTS = 3.3

_RECORD = struct.Struct("<f")


@dataclass
class ZState:
    """Depth in the global frame."""

    z: float = 0.0  # [m]


class ZStateEstimator(DataSource):
    """Converts the raw pressure reading into depth."""

    def __init__(self, printer: Printer) -> None:
        super().__init__("z", "float")
        self._printer = printer
        self.state = ZState()
        self.depth_cal_slope = DEPTH_CAL_SLOPE
        self.depth_cal_intercept = DEPTH_CAL_INTERCEPT
        self.last_execution_time = -1

    def init(self) -> None:
        """Reset the depth to zero."""
        self.state.z = 0.0
        self._printer.print_message("Pressure Sensor Voltage: 10", 20)

    def update_state(self, pressure_signal: int) -> None:
        """Update the depth from a raw ADC pressure reading."""
        voltage = float(pressure_signal) * (ADC_REFERENCE_VOLTS / ADC_MAX)
        self.state.z = self.depth_cal_slope * voltage + self.depth_cal_intercept
        # shown briefly to help calibrate the sensor
        self._printer.print_message(f"Pressure Sensor Voltage: {voltage:.2f}", 1)

    def print_state(self) -> str:
        """Return the depth as one status line."""
        return f"Z_State: z: {self.state.z:.2f}[m]"

    def data_bytes(self) -> bytes:
        return _RECORD.pack(self.state.z)