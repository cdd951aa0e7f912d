"""Proportional surface navigation towards a GPS waypoint."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable

from divebot.datasource import DataSource
from divebot.gps import N_SATS_THRESHOLD, GPSState
from divebot.printer import Printer
from divebot.xy_state import XYState

SUCCESS_RADIUS = 10  # [m]
STATE_DIMS = 2
_DEBUG_ROW = 14

_RECORD = struct.Struct("<5f")


def angle_diff(a: float) -> float:
    """Wrap an angle in radians into the range [-pi, pi]."""
    if not math.isfinite(a):
        raise ValueError(f"angle must be finite: {a}")
    while a < -math.pi:
        a += 2 * math.pi
    while a > math.pi:
        a -= 2 * math.pi
    return a


class SurfaceControl(DataSource):
    """Drives the left and right motors towards a surface waypoint.

    Waypoints are given as a flat sequence of x, y pairs in metres.
    """

    def __init__(self, printer: Printer) -> None:
        super().__init__("u,uL,uR,yaw,yaw_des", "float,float,float,float,float")
        self._printer = printer
        self.yaw_des = 0.0  # desired yaw [rad]
        self.yaw = 0.0  # current yaw [rad]
        self.x = 0.0  # current x relative to the first fix [m]
        self.y = 0.0  # current y relative to the first fix [m]
        self.x_init = 0.0
        self.y_init = 0.0
        self.dist = 0.0  # distance to the waypoint [m]
        self.u = 0.0  # control effort
        self.kp = 10.0  # proportional gain
        self.kr = 1.0  # right motor gain correction
        self.kl = 1.0  # left motor gain correction
        self.avg_power = 20.0  # average forward thrust
        self.u_r = 0.0  # right motor effort
        self.u_l = 0.0  # left motor effort
        self.navigate_state = True
        self.at_point = False
        self.complete = False
        self.way_points: list[float] = []
        self._current_way_point = 0
        self._gps_acquired = False
        self._navigate_delay = 0
        self._delay_start_time = 0
        self._current_time = 0
        self._delayed = False
        self.last_execution_time = -1

    @property
    def total_way_points(self) -> int:
        """Number of stored waypoint coordinates."""
        return len(self.way_points)

    @property
    def current_way_point(self) -> int:
        """Index of the waypoint being approached."""
        return self._current_way_point

    @property
    def gps_acquired(self) -> bool:
        """True when the last update had enough satellites."""
        return self._gps_acquired

    @property
    def delayed(self) -> bool:
        """True while holding at a reached waypoint."""
        return self._delayed

    def init(self, way_points: Iterable[float], navigate_delay: int) -> None:
        """Set the flat x, y waypoint list [m] and the hold time at each [ms]."""
        points = [float(point) for point in way_points]
        if len(points) % STATE_DIMS:
            raise ValueError(
                f"waypoints come in x, y pairs; got {len(points)} coordinates"
            )
        self.way_points = points
        self._navigate_delay = int(navigate_delay)
        self.at_point = not points

    def _way_point(self, dim: int) -> int:
        return int(self.way_points[self._current_way_point * STATE_DIMS + dim])

    def navigate(self, state: XYState, gps_state: GPSState, current_time: int) -> None:
        """Set the motor efforts towards the current waypoint."""
        self._current_time = int(current_time)
        if gps_state.num_sat < N_SATS_THRESHOLD:
            self._gps_acquired = False
            return
        if not self._gps_acquired:
            self.x_init = state.x
            self.y_init = state.y
        self._gps_acquired = True

        self._update_point(state.x, state.y)

        if self.at_point or self._delayed:
            self.u_l = 0.0
            self.u_r = 0.0
            return

        x_des = self._way_point(0)
        y_des = self._way_point(1)
        self.y = abs(state.y - self.y_init)
        self.x = abs(state.x - self.x_init)
        ex = 0.5 * (x_des - self.x)
        ey = 0.5 * (y_des - self.y)
        self.u_l = self.kl * ex
        self.u_r = self.kr * ey

    def print_string(self) -> str:
        """Return the control state as one status line."""
        if not self.navigate_state:
            return "SurfaceControl: Not in navigate state"
        if not self._gps_acquired:
            return "SurfaceControl: Waiting to acquire more satellites..."
        return (
            f"SurfaceControl: Yaw_Des: {math.degrees(self.yaw_des):.2f}[deg], "
            f"Yaw: {math.degrees(self.yaw):.2f}[deg], "
            f"u: {self.u:.2f}, u_L: {self.u_l:.2f}, u_R: {self.u_r:.2f}"
        )

    def print_waypoint_update(self) -> str:
        """Return the waypoint progress as one status line."""
        if not self.navigate_state:
            return "SurfaceControl: Not in navigate state"
        if not self._gps_acquired:
            return "SurfaceControl: Waiting to acquire more satellites..."
        if self._delayed:
            return f"SurfaceControl: Waiting for delay{self._current_way_point}"
        return (
            f"SurfaceControl: Current Waypoint: {self._current_way_point}"
            f"Current x:{self.x:.2f}Current y:{self.y:.2f}"
            f"; Distance from Waypoint: {self.dist:.2f}[m]"
        )

    def _update_point(self, x: float, y: float) -> None:
        if self._current_way_point == self.total_way_points:
            return
        x_des = float(self._way_point(0))
        y_des = float(self._way_point(1))
        self.dist = math.hypot(x - x_des, y - y_des)
        if not (self.dist < SUCCESS_RADIUS or self._delayed):
            return

        self.u_l = 0.0
        self.u_r = 0.0
        self._printer.print_value(_DEBUG_ROW, f"{self.u_l:.2f}")
        if self._delay_start_time == 0:
            self._delay_start_time = self._current_time
        if self._current_time < self._delay_start_time + self._navigate_delay:
            self._delayed = True
            message = (
                f"Got to surface waypoint {self._current_way_point}"
                ", waiting until delay is over"
            )
        else:
            self._delayed = False
            self._delay_start_time = 0
            message = (
                f"Got to surface waypoint {self._current_way_point}"
                ", now directing to next point"
            )
            self.at_point = True
        self._printer.print_message(message, 20)

    def data_bytes(self) -> bytes:
        return _RECORD.pack(self.u, self.u_l, self.u_r, self.yaw, self.yaw_des)