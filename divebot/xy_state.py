"""Surface position estimate from GPS fixes and IMU heading."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from divebot.datasource import DataSource
from divebot.gps import N_SATS_THRESHOLD, GPSState
from divebot.imu import IMUState

RADIUS_OF_EARTH_M = 6371000  # [m]

# coordinates of the chosen origin [deg]
ORIGIN_LAT = 34.106465
ORIGIN_LON = -117.712488

_RECORD = struct.Struct("<ff")


@dataclass
class XYState:
    """Position and yaw in the global frame."""

    x: float = 0.0  # [m]
    y: float = 0.0  # [m]
    yaw: float = 0.0  # [rad] counter-clockwise from magnetic east


class XYStateEstimator(DataSource):
    """Turns GPS latitude/longitude into metres from the origin, and heading into yaw."""

    def __init__(self) -> None:
        super().__init__("x,y", "float,float")
        self.state = XYState()
        self.origin_lat = ORIGIN_LAT
        self.origin_lon = ORIGIN_LON
        self._gps_acquired = False
        self.last_execution_time = -1

    @property
    def gps_acquired(self) -> bool:
        """True when the last update had enough satellites for a fix."""
        return self._gps_acquired

    def init(self) -> None:
        """Reset the position and yaw to zero."""
        self.state.x = 0.0
        self.state.y = 0.0
        self.state.yaw = 0.0

    def update_state(self, imu_state: IMUState, gps_state: GPSState) -> None:
        """Update the estimate when the GPS has enough satellites."""
        if gps_state.num_sat < N_SATS_THRESHOLD:
            self._gps_acquired = False
            return
        longitude_change = math.radians(gps_state.lon) - math.radians(self.origin_lon)
        latitude_change = math.radians(gps_state.lat) - math.radians(self.origin_lat)
        self.state.x = (
            RADIUS_OF_EARTH_M * longitude_change * math.cos(math.radians(self.origin_lat))
        )
        self.state.y = RADIUS_OF_EARTH_M * latitude_change
        self.state.yaw = -math.radians(imu_state.heading) + math.pi / 2
        self._gps_acquired = True

    def print_state(self) -> str:
        """Return the estimate as one status line."""
        if not self._gps_acquired:
            return "XY_State: Waiting to acquire more satellites..."
        s = self.state
        return f"XY_State: x: {s.x:.2f}[m], y: {s.y:.2f}[m], Yaw:{s.yaw:.2f}[rad]; "

    def data_bytes(self) -> bytes:
        return _RECORD.pack(self.state.x, self.state.y)