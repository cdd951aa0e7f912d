"""Proportional depth control through a list of depth waypoints."""

from __future__ import annotations

import struct
from collections.abc import Iterable

from divebot.datasource import DataSource
from divebot.printer import Printer
from divebot.z_state import ZState

DEPTH_MARGIN = 0.05  # [m]
SURFACE_EFFORT = -80.0
DEFAULT_KP = 60.0

_RECORD = struct.Struct("<3f")


class DepthControl(DataSource):
    """Dives through the depth waypoints in turn, then brings the robot up."""

    def __init__(self, printer: Printer) -> None:
        super().__init__("uV,depth,depth_des", "float,float,float")
        self._printer = printer
        self.depth_des = 0.0  # desired depth [m]
        self.depth = 0.0  # current depth [m]
        self.dist = 0.0  # distance to the waypoint [m]
        self.kp = DEFAULT_KP  # proportional gain
        self.u_v = 0.0  # vertical motor effort
        self.dive_state = True
        self.surface_state = False
        self.at_depth = False
        self.at_surface = False
        self.complete = False
        self.way_points: list[float] = []
        self._current_way_point = 0
        self._dive_delay = 0
        self._delay_start_time = 0
        self._current_time = 0
        self._delayed = False
        self.last_execution_time = -1

    @property
    def total_way_points(self) -> int:
        """Number of depth waypoints."""
        return len(self.way_points)

    @property
    def current_way_point(self) -> int:
        """Index of the waypoint being approached."""
        return self._current_way_point

    @property
    def delayed(self) -> bool:
        """True while holding at a reached waypoint."""
        return self._delayed

    def init(self, way_points: Iterable[float], dive_delay: int) -> None:
        """Set the depth waypoints [m] and the hold time at each [ms]."""
        self.way_points = [float(point) for point in way_points]
        self._dive_delay = int(dive_delay)

    def dive(self, state: ZState, current_time: int) -> None:
        """Set the vertical effort towards the current waypoint."""
        self._current_time = int(current_time)
        self._update_point(state.z)
        if self.at_depth or self._current_way_point == self.total_way_points:
            return
        self.depth_des = self.way_points[self._current_way_point]
        self.depth = state.z
        error = abs(self.depth_des - self.depth)
        self.u_v = 2 * self.kp * error

    def surface(self, state: ZState) -> None:
        """Drive upward until the surface is reached."""
        self.depth_des = 0.0
        self.depth = state.z
        message = ""
        message_time = 20
        if self.depth - self.depth_des < DEPTH_MARGIN or self._delayed:
            self.at_surface = True
            self.complete = True
            self.u_v = 0.0
            message = "Got to surface. Finished Depth Control"
            message_time = 10
        else:
            self.at_surface = False
            self.u_v = SURFACE_EFFORT
        self._printer.print_message(message, message_time)

    def print_string(self) -> str:
        """Return the control state as one status line."""
        if not self.dive_state and not self.surface_state:
            return "DepthControl: Not in dive or surface state"
        return (
            f"DepthControl: Depth_Des: {self.depth_des:.2f}[m], "
            f"Depth: {self.depth:.2f}[m], uV: {self.u_v:.2f}"
        )

    def print_waypoint_update(self) -> str:
        """Return the waypoint progress as one status line."""
        if not self.dive_state and not self.surface_state:
            return "DepthControl: Not in dive or surface state"
        if self._delayed:
            return "DepthControl: Waiting for delay"
        return (
            f"; Distance from Waypoint: {self.dist:.2f}[m]"
            f"Current Depth{self.depth:.2f}[m]"
            f"Depth Des:{self.depth_des:.2f}[m]"
        )

    def _update_point(self, z: float) -> None:
        if self._current_way_point == self.total_way_points:
            return
        z_des = self.way_points[self._current_way_point]
        self.dist = abs(z_des - z)
        if not (self.dist < DEPTH_MARGIN or self._delayed):
            return

        message_time = 20
        if self._delay_start_time == 0:
            self._delay_start_time = self._current_time
        if self._current_time < self._delay_start_time + self._dive_delay:
            self._delayed = True
            message = (
                f"Got to depth waypoint {self._current_way_point}"
                ", waiting until delay is over"
            )
        else:
            self._delayed = False
            self._delay_start_time = 0
            message = (
                f"Got to depth waypoint {self._current_way_point}"
                ", now directing to next point"
            )
            self._current_way_point += 1
        if self._current_way_point == self.total_way_points:
            message = "Got to final depth waypoint. Now surfacing"
            self.at_depth = True
            self.u_v = 0.0
            message_time = 10
            self._current_way_point = 0
        self._printer.print_message(message, message_time)

    def data_bytes(self) -> bytes:
        return _RECORD.pack(self.u_v, self.depth, self.depth_des)