import math
import struct

import pytest

from divebot.gps import N_SATS_THRESHOLD, GPSState
from divebot.imu import IMUState
from divebot.xy_state import ORIGIN_LAT, ORIGIN_LON, XYState, XYStateEstimator


def _fix(lat=ORIGIN_LAT, lon=ORIGIN_LON, sats=N_SATS_THRESHOLD):
    return GPSState(lat=lat, lon=lon, num_sat=sats)


def test_csv_headings():
    est = XYStateEstimator()
    assert est.csv_var_names == "x,y"
    assert est.csv_data_types == "float,float"


def test_waiting_without_enough_satellites():
    est = XYStateEstimator()
    est.init()
    est.update_state(IMUState(), _fix(lat=ORIGIN_LAT + 1, sats=N_SATS_THRESHOLD - 1))
    assert est.gps_acquired is False
    assert est.state == XYState()
    assert est.print_state() == "XY_State: Waiting to acquire more satellites..."


def test_origin_maps_to_zero_and_heading_zero_points_north():
    est = XYStateEstimator()
    est.update_state(IMUState(heading=0.0), _fix())
    assert est.gps_acquired is True
    assert est.state.x == pytest.approx(0.0, abs=1e-6)
    assert est.state.y == pytest.approx(0.0, abs=1e-6)
    assert est.state.yaw == pytest.approx(math.pi / 2)
    assert est.print_state() == "XY_State: x: 0.00[m], y: 0.00[m], Yaw:1.57[rad]; "


def test_heading_east_gives_zero_yaw():
    est = XYStateEstimator()
    est.update_state(IMUState(heading=90.0), _fix())
    assert est.state.yaw == pytest.approx(0.0, abs=1e-9)


def test_north_and_east_directions():
    north = XYStateEstimator()
    north.update_state(IMUState(), _fix(lat=ORIGIN_LAT + 0.001))
    east = XYStateEstimator()
    east.update_state(IMUState(), _fix(lon=ORIGIN_LON + 0.001))
    assert north.state.y > 0
    assert north.state.x == pytest.approx(0.0, abs=1e-6)
    assert east.state.x > 0
    assert east.state.y == pytest.approx(0.0, abs=1e-6)
    # longitude lines converge away from the equator
    assert east.state.x < north.state.y


def test_south_west_is_negative():
    est = XYStateEstimator()
    est.update_state(IMUState(), _fix(lat=ORIGIN_LAT - 0.01, lon=ORIGIN_LON - 0.01))
    assert est.state.x < 0
    assert est.state.y < 0


def test_data_bytes_round_trip():
    est = XYStateEstimator()
    est.update_state(IMUState(), _fix(lat=ORIGIN_LAT + 0.002, lon=ORIGIN_LON - 0.003))
    data = est.data_bytes()
    assert len(data) == 8
    x, y = struct.unpack("<ff", data)
    assert x == pytest.approx(est.state.x, rel=1e-6)
    assert y == pytest.approx(est.state.y, rel=1e-6)


def test_write_data_bytes_into_buffer():
    est = XYStateEstimator()
    est.update_state(IMUState(), _fix(lat=ORIGIN_LAT + 0.002))
    buffer = bytearray(16)
    assert est.write_data_bytes(buffer, 4) == 12
    assert bytes(buffer[4:12]) == est.data_bytes()


def test_init_resets_state():
    est = XYStateEstimator()
    est.update_state(IMUState(heading=45.0), _fix(lat=ORIGIN_LAT + 0.01))
    est.init()
    assert est.state == XYState()