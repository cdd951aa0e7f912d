"""Binary block logging of every data source to numbered files."""

from __future__ import annotations

import itertools
import sys
from pathlib import Path
from typing import TextIO

from divebot.datasource import DataSource
from divebot.printer import Printer

LOG_FILENAME_BASE = "log"
HEADINGS_FILENAME_BASE = "inf"
LOG_FILENAME_BUFFERLEN = 20
# number of blocks a log file may hold
FILE_BLOCK_COUNT = 8192
BYTES_PER_BLOCK = 256
BUFFER_BLOCK_COUNT = 5
MAX_NUM_DATASOURCES = 10
_NUMBER_WIDTH = 3


def pad_number(number: int, width: int) -> str:
    """Left-pad ``number`` with zeros to ``width`` digits."""
    zeros = sum(1 for power in range(1, width) if number < 10**power)
    return "0" * zeros + str(number)


class Logger:
    """Writes one fixed-size block per call, collected from the included sources.

    ``directory`` plays the role of the storage card. On ``init`` the first
    unused ``logNNN.bin`` name is chosen and the column headings and types go
    to the matching ``infNNN.txt``.
    """

    def __init__(
        self,
        directory: str | Path,
        printer: Printer,
        stream: TextIO | None = None,
    ) -> None:
        self.directory = Path(directory)
        self._printer = printer
        self._stream = stream
        self._sources: list[DataSource] = []
        self.log_path: Path | None = None
        self.heading_path: Path | None = None
        self.written_blocks = 0
        self.keep_logging = False
        self.last_execution_time = -1

    @property
    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def sources(self) -> tuple[DataSource, ...]:
        """The included sources, in logging order."""
        return tuple(self._sources)

    def include(self, source: DataSource) -> None:
        """Add a source; include every source before calling ``init``."""
        if len(self._sources) >= MAX_NUM_DATASOURCES:
            raise ValueError(
                f"at most {MAX_NUM_DATASOURCES} data sources can be logged"
            )
        self._sources.append(source)

    def _log_file(self, number: int) -> Path:
        return self.directory / f"{LOG_FILENAME_BASE}{pad_number(number, _NUMBER_WIDTH)}.bin"

    def init(self) -> None:
        """Choose the file names, write the headings and create the log file."""
        out = self._out
        out.write("Initializing SD Card... Stop")
        if not self.directory.is_dir():
            out.write("failed!\n")
            return
        out.write("done!\n")
        if not self._sources:
            raise ValueError("include at least one data source before init")

        number = next(n for n in itertools.count() if not self._log_file(n).exists())
        self.log_path = self._log_file(number)
        numstr = pad_number(number, _NUMBER_WIDTH)
        self.heading_path = self.directory / f"{HEADINGS_FILENAME_BASE}{numstr}.txt"

        self._printer.print_message(
            f"Logger: Using log file name {self.log_path.name}", 30
        )

        headings = ",".join(source.csv_var_names for source in self._sources)
        data_types = ",".join(source.csv_data_types for source in self._sources)
        try:
            with self.heading_path.open("ab") as heading_file:
                heading_file.write(f"{headings}\n{data_types}\r\n".encode("ascii"))
        except OSError:
            pass

        self._printer.print_message("Creating log file", 10)
        try:
            with self.log_path.open("ab"):
                pass
        except OSError:
            self._printer.print_message(
                f"Logger: error creating {self.log_path.name}", 0
            )

        self.keep_logging = True

    def log(self) -> None:
        """Append one block holding the current record of every source."""
        if self.log_path is None:
            raise RuntimeError("logger has not been initialised")

        buffer = bytearray(BYTES_PER_BLOCK)
        idx = 0
        for source in self._sources:
            try:
                idx = source.write_data_bytes(buffer, idx)
            except IndexError:
                idx = BYTES_PER_BLOCK
            if idx >= BYTES_PER_BLOCK:
                self._printer.print_message(
                    "Too much data per log. Increase BYTES_PER_BLOCK or reduce data", 2
                )

        # the limit is reported, but logging carries on
        if self.written_blocks >= FILE_BLOCK_COUNT:
            self._printer.print_message(
                "Current file size limit reached. Change FILE_BLOCK_COUNT to fix. "
                "Stopping logging for now.",
                0,
            )

        try:
            with self.log_path.open("ab") as log_file:
                if not log_file.write(buffer):
                    self._printer.print_message("Logger: Error printing to SD", 0)
        except OSError:
            pass

        self.written_blocks += 1
        self.keep_logging = True

    def print_state(self) -> str:
        """Return the logging status as one status line."""
        if self.keep_logging and self.log_path is not None:
            return (
                f"Logger: Just logged buffer {self.written_blocks} "
                f"to file: {self.log_path.name}"
            )
        return "Logger: LOGGING ERROR, LOGGING HAS STOPPED"