import struct

import pytest

from divebot.datasource import DataSource


class _Pair(DataSource):
    def __init__(self, a, b):
        super().__init__("a,b", "int,int")
        self.a = a
        self.b = b

    def data_bytes(self):
        return struct.pack("<ii", self.a, self.b)


def test_abstract_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        DataSource("x", "float")


def test_csv_descriptions_are_kept():
    source = _Pair(1, 2)
    DataSource.__init__(source, "x,y,z", "float,float,float")
    assert source.csv_var_names == "x,y,z"
    assert source.csv_data_types == "float,float,float"


def test_write_places_bytes_and_returns_next_index():
    source = _Pair(7, -3)
    buffer = bytearray(16)
    end = DataSource.write_data_bytes(source, buffer, 4)
    assert end == 4 + len(source.data_bytes())
    assert struct.unpack_from("<ii", buffer, 4) == (7, -3)
    assert buffer[:4] == bytearray(4)
    assert buffer[end:] == bytearray(len(buffer) - end)


def test_consecutive_writes_chain():
    first = _Pair(1, 2)
    second = _Pair(3, 4)
    buffer = bytearray(32)
    idx = DataSource.write_data_bytes(first, buffer, 0)
    idx = DataSource.write_data_bytes(second, buffer, idx)
    assert idx == 2 * len(first.data_bytes())
    assert struct.unpack_from("<iiii", buffer, 0) == (1, 2, 3, 4)


def test_buffer_length_is_unchanged():
    buffer = bytearray(8)
    end = DataSource.write_data_bytes(_Pair(5, 6), buffer, 0)
    assert end == 8
    assert len(buffer) == 8


def test_overflow_raises():
    buffer = bytearray(10)
    with pytest.raises(IndexError):
        DataSource.write_data_bytes(_Pair(1, 1), buffer, 4)


def test_negative_index_raises():
    with pytest.raises(IndexError):
        DataSource.write_data_bytes(_Pair(1, 1), bytearray(16), -1)