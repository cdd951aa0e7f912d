"""GPS position logging and the receiver interface it reads from."""

from __future__ import annotations

import math
import struct
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from divebot.datasource import DataSource

GPS_READ_INTERVAL = 3

# number of acquired satellites needed for an accurate position (6 recommended)
N_SATS_THRESHOLD = 5

GPS_BAUD = 9600

_RECORD = struct.Struct("<ffB")
_FLOAT32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round ``value`` to single precision, as the receiver's fields are stored."""
    return _FLOAT32.unpack(_FLOAT32.pack(float(value)))[0]


def convert_deg_min_to_dec_deg(deg_min: float) -> float:
    """Convert an NMEA ``DDDMM.mmmm`` value to decimal degrees."""
    minutes = math.fmod(float(deg_min), 100.0)
    degrees = int(deg_min / 100)
    return degrees + minutes / 60


class GPSCommand(Enum):
    """Configuration commands sent to the receiver at start-up."""

    SET_NMEA_OUTPUT_RMCGGA = "set_nmea_output_rmcgga"
    SET_NMEA_UPDATE_1HZ = "set_nmea_update_1hz"


@dataclass
class GPSState:
    """Latest fix reported by the receiver."""

    lat: float = 0.0
    lon: float = 0.0
    age: int = 0
    hdop: int = 0
    num_sat: int = 0


class GPSReceiver(ABC):
    """A serial NMEA receiver that parses sentences into a position fix."""

    def __init__(self) -> None:
        self.latitude_degrees = 0.0
        self.longitude_degrees = 0.0
        self.satellites = 0

    @abstractmethod
    def begin(self, baud: int) -> None:
        """Open the serial link at ``baud``."""

    @abstractmethod
    def send_command(self, command: GPSCommand) -> None:
        """Send a configuration command to the receiver."""

    @abstractmethod
    def read(self) -> None:
        """Consume pending serial input."""

    @abstractmethod
    def new_nmea_received(self) -> bool:
        """Return True when a complete sentence is waiting."""

    @abstractmethod
    def last_nmea(self) -> str:
        """Return the last complete sentence and clear the waiting flag."""

    @abstractmethod
    def parse(self, sentence: str) -> bool:
        """Parse ``sentence`` into the fix fields; return False if it is invalid."""


class SensorGPS(DataSource):
    """Reads the GPS receiver and logs latitude, longitude and satellite count."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__("lat,lon,nsats", "float,float,uint8")
        self._stream = stream
        self.state = GPSState()
        self.last_execution_time = -1

    @property
    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def init(self, receiver: GPSReceiver) -> None:
        """Open the receiver and request RMC and GGA sentences at 1 Hz."""
        out = self._out
        out.write("Initializing GPS... ")
        receiver.begin(GPS_BAUD)
        receiver.send_command(GPSCommand.SET_NMEA_OUTPUT_RMCGGA)
        receiver.send_command(GPSCommand.SET_NMEA_UPDATE_1HZ)
        out.write(" done\n")

    def read(self, receiver: GPSReceiver) -> None:
        """Poll the receiver and take over its fix when a sentence has arrived."""
        receiver.read()
        if receiver.new_nmea_received():
            # the state is copied before the new sentence is parsed
            self.update_state(receiver)
            if not receiver.parse(receiver.last_nmea()):
                return

    def update_state(self, receiver: GPSReceiver) -> None:
        """Copy the receiver's latest fix into ``state``."""
        self.state.lat = _f32(receiver.latitude_degrees)
        self.state.lon = _f32(receiver.longitude_degrees)
        self.state.num_sat = int(receiver.satellites) & 0xFF

    def print_state(self) -> str:
        """Return the fix as one status line."""
        return (
            f"GPS: Lat: {self.state.lat:.7f}[deg],"
            f" Lon: {self.state.lon:.7f}[deg],"
            f" Nsats: {self.state.num_sat}"
        )

    def data_bytes(self) -> bytes:
        return _RECORD.pack(self.state.lat, self.state.lon, self.state.num_sat & 0xFF)