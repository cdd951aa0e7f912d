"""Orientation and acceleration logging from the accelerometer and magnetometer."""

from __future__ import annotations

import math
import struct
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TextIO

from divebot.datasource import DataSource

PI_F = 3.14159265

# offsets removed from raw accelerometer readings [mg]
ACCEL_OFFSETS: tuple[float, float, float] = (1.0, 1.0, 1.0)
# offsets removed from magnetometer readings [uT]
MAG_OFFSETS: tuple[float, float, float] = (1.0, 1.0, 1.0)
# soft iron error compensation matrix
MAG_IRONCOMP: tuple[tuple[float, float, float], ...] = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)

_RECORD = struct.Struct("<9f")


@dataclass
class IMUState:
    """Latest corrected readings and the orientation computed from them."""

    accel_x: float = 0.0  # [mg]
    accel_y: float = 0.0
    accel_z: float = 0.0
    mag_x: float = 0.0  # [uT]
    mag_y: float = 0.0
    mag_z: float = 0.0
    roll: float = 0.0  # [deg]
    pitch: float = 0.0
    heading: float = 0.0


class AxisSensor(ABC):
    """A three-axis sensor on the I2C bus."""

    @abstractmethod
    def begin(self) -> bool:
        """Start and enable the sensor; return True on success."""

    @abstractmethod
    def get_axes(self) -> tuple[int, int, int]:
        """Return the raw x, y, z readings."""


class SensorIMU(DataSource):
    """Combines accelerometer and magnetometer readings into roll, pitch and heading."""

    def __init__(
        self,
        accelerometer: AxisSensor,
        magnetometer: AxisSensor,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(
            "rollIMU,pitchIMU,headingIMU,accelX,accelY,accelZ,magX,magY,magZ",
            ",".join(["float"] * 9),
        )
        self._accelerometer = accelerometer
        self._magnetometer = magnetometer
        self._stream = stream
        self.state = IMUState()
        self.accel_offsets = ACCEL_OFFSETS
        self.mag_offsets = MAG_OFFSETS
        self.mag_ironcomp = MAG_IRONCOMP
        self.last_execution_time = -1

    @property
    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def init(self) -> None:
        """Start both sensors and report whether they came up."""
        out = self._out
        out.write("Initializing IMU... ")
        if self._accelerometer.begin() and self._magnetometer.begin():
            out.write("done\n")
        else:
            out.write("failed!\n")

    def read(self) -> None:
        """Take new samples, correct them and update the orientation."""
        raw_ax, raw_ay, raw_az = self._accelerometer.get_axes()
        # the sensor's y axis is left-handed
        accel = (float(raw_ax), -float(raw_ay), float(raw_az))
        self.state.accel_x, self.state.accel_y, self.state.accel_z = (
            value - offset for value, offset in zip(accel, self.accel_offsets)
        )

        raw_mx, raw_my, raw_mz = self._magnetometer.get_axes()
        # mGauss to uTesla, then remove offsets
        mag = [
            value * 0.1 - offset
            for value, offset in zip(
                (float(raw_mx), -float(raw_my), float(raw_mz)), self.mag_offsets
            )
        ]
        self.state.mag_x, self.state.mag_y, self.state.mag_z = (
            sum(m * c for m, c in zip(mag, row)) for row in self.mag_ironcomp
        )

        s = self.state
        # the y field reading is passed for z as well
        self.get_orientation(s.accel_x, s.accel_y, s.accel_z, s.mag_x, s.mag_y, s.mag_y)

    def get_orientation(
        self, ax: float, ay: float, az: float, mx: float, my: float, mz: float
    ) -> None:
        """Compute roll, pitch and heading in degrees from corrected readings."""
        roll = math.atan2(ay, az)
        denominator = ay * math.sin(roll) + az * math.cos(roll)
        if denominator == 0:
            pitch = PI_F / 2 if ax > 0 else -PI_F / 2
        else:
            pitch = math.atan(-ax / denominator)
        heading = -math.atan2(
            mz * math.sin(roll) - my * math.cos(roll),
            mx * math.cos(pitch)
            + my * math.sin(pitch) * math.sin(roll)
            + mz * math.sin(pitch) * math.cos(roll),
        )
        to_degrees = 180.0 / PI_F
        self.state.roll = roll * to_degrees
        self.state.pitch = pitch * to_degrees
        self.state.heading = heading * to_degrees

    def print_roll_pitch_heading(self) -> str:
        """Return the orientation as one status line."""
        s = self.state
        return (
            f"IMU: roll: {s.roll:.2f}[deg], pitch: {s.pitch:.2f}[deg],"
            f" heading: {s.heading:.2f}[deg]"
        )

    def print_accels(self) -> str:
        """Return the accelerations as one status line."""
        s = self.state
        return (
            f"IMU: accelX: {s.accel_x:.2f}[mg],  accelY: {s.accel_y:.2f}[mg], "
            f" accelZ: {s.accel_z:.2f}[mg]"
        )

    def data_bytes(self) -> bytes:
        s = self.state
        return _RECORD.pack(
            s.roll, s.pitch, s.heading,
            s.accel_x, s.accel_y, s.accel_z,
            s.mag_x, s.mag_y, s.mag_z,
        )