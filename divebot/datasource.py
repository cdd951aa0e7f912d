"""Base class for every component whose state goes into the binary log."""

from __future__ import annotations

from abc import ABC, abstractmethod

LONGEST_CSV = 100


class DataSource(ABC):
    """A component that reports one fixed-size record per log entry.

    ``csv_var_names`` holds comma separated headings for each value in the
    record and ``csv_data_types`` the matching comma separated type names.
    """

    def __init__(self, csv_var_names: str, csv_data_types: str) -> None:
        self.csv_var_names = csv_var_names
        self.csv_data_types = csv_data_types

    @abstractmethod
    def data_bytes(self) -> bytes:
        """Return the current record as raw little-endian bytes."""

    def write_data_bytes(self, buffer: bytearray, idx: int) -> int:
        """Write the record into ``buffer`` at ``idx``; return the next free index."""
        data = self.data_bytes()
        end = idx + len(data)
        if idx < 0 or end > len(buffer):
            raise IndexError(
                f"record of {len(data)} bytes at index {idx} does not fit "
                f"in a buffer of {len(buffer)} bytes"
            )
        buffer[idx:end] = data
        return end