import io
import struct

import pytest

from divebot.depth_control import DEPTH_MARGIN, SURFACE_EFFORT, DepthControl
from divebot.printer import Printer
from divebot.z_state import ZState


@pytest.fixture
def printer():
    return Printer(stream=io.StringIO())


@pytest.fixture
def control(printer):
    return DepthControl(printer)


def _shown(printer):
    return [line.strip() for line in printer.render(0).splitlines()]


def test_init_stores_waypoints(control):
    control.init([1, 2.5], 100)
    assert control.way_points == [1.0, 2.5]
    assert control.total_way_points == 2


def test_dive_effort_is_proportional_to_error(printer):
    near = DepthControl(printer)
    far = DepthControl(printer)
    near.init([2.0], 0)
    far.init([2.0], 0)
    near.dive(ZState(z=1.5), 10)
    far.dive(ZState(z=1.0), 10)
    assert far.u_v == pytest.approx(2 * near.u_v)
    assert near.depth_des == 2.0
    assert near.depth == 1.5


def test_dive_effort_ignores_error_sign(printer):
    above = DepthControl(printer)
    below = DepthControl(printer)
    above.init([2.0], 0)
    below.init([2.0], 0)
    above.dive(ZState(z=1.0), 10)
    below.dive(ZState(z=3.0), 10)
    assert above.u_v == pytest.approx(below.u_v)
    assert above.u_v > 0


def test_dive_effort_scales_with_gain(printer):
    base = DepthControl(printer)
    doubled = DepthControl(printer)
    doubled.kp = 2 * base.kp
    for control in (base, doubled):
        control.init([2.0], 0)
        control.dive(ZState(z=0.5), 10)
    assert doubled.u_v == pytest.approx(2 * base.u_v)


def test_reaching_waypoint_without_delay_advances(control, printer):
    control.init([1.0, 2.0], 0)
    control.dive(ZState(z=1.0), 10)
    assert control.current_way_point == 1
    assert control.depth_des == 2.0
    assert "Got to depth waypoint 0, now directing to next point" in _shown(printer)


def test_waypoint_hold_waits_for_delay(control, printer):
    control.init([1.0, 2.0], 100)
    control.dive(ZState(z=1.0), 50)
    assert control.delayed
    assert control.current_way_point == 0
    assert control.print_waypoint_update() == "DepthControl: Waiting for delay"
    assert "Got to depth waypoint 0, waiting until delay is over" in _shown(printer)

    control.dive(ZState(z=1.3), 120)
    assert control.delayed
    assert control.current_way_point == 0

    control.dive(ZState(z=1.3), 150)
    assert not control.delayed
    assert control.current_way_point == 1
    assert control.depth_des == 2.0


def test_final_waypoint_sets_at_depth(control, printer):
    control.init([1.0], 0)
    control.dive(ZState(z=1.0 + DEPTH_MARGIN / 2), 10)
    assert control.at_depth
    assert control.u_v == 0.0
    assert control.current_way_point == 0
    assert "Got to final depth waypoint. Now surfacing" in _shown(printer)

    control.dive(ZState(z=5.0), 20)
    assert control.u_v == 0.0


def test_no_waypoints_leaves_effort_untouched(control):
    control.init([], 0)
    control.dive(ZState(z=3.0), 10)
    assert control.u_v == 0.0
    assert control.depth_des == 0.0


def test_surface_when_deep_drives_upward(control):
    control.surface(ZState(z=2.0))
    assert control.u_v == SURFACE_EFFORT
    assert not control.at_surface
    assert not control.complete
    assert control.depth_des == 0.0


def test_surface_when_shallow_completes(control, printer):
    control.surface(ZState(z=DEPTH_MARGIN / 2))
    assert control.at_surface
    assert control.complete
    assert control.u_v == 0.0
    assert "Got to surface. Finished Depth Control" in _shown(printer)


def test_print_string_outside_any_state(control):
    control.dive_state = False
    control.surface_state = False
    assert control.print_string() == "DepthControl: Not in dive or surface state"
    assert (
        control.print_waypoint_update()
        == "DepthControl: Not in dive or surface state"
    )


def test_print_string_reports_values(control):
    control.init([1.0], 0)
    control.dive(ZState(z=0.5), 10)
    assert control.print_string() == (
        "DepthControl: Depth_Des: 1.00[m], Depth: 0.50[m], uV: 60.00"
    )


def test_print_waypoint_update_reports_distance(control):
    control.init([1.0], 0)
    control.dive(ZState(z=0.5), 10)
    text = control.print_waypoint_update()
    assert text.startswith("; Distance from Waypoint: 0.50[m]")
    assert text.endswith("Depth Des:1.00[m]")


def test_data_bytes_round_trip(control):
    control.init([2.0], 0)
    control.dive(ZState(z=1.5), 10)
    assert struct.unpack("<3f", control.data_bytes()) == (
        control.u_v,
        control.depth,
        control.depth_des,
    )


def test_write_data_bytes_advances_index(control):
    buffer = bytearray(32)
    assert control.write_data_bytes(buffer, 4) == 4 + 3 * 4
    assert bytes(buffer[4:16]) == control.data_bytes()