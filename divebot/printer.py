"""Serial status screen: persistent value rows and ageing message rows."""

from __future__ import annotations

import sys
from typing import TextIO

MAX_ROW = 13
LONGEST_STRING = 80
_TEXT_LIMIT = LONGEST_STRING - 1
_CLEAR_LINES = 19


def format_time(current_time_ms: int) -> str:
    """Format milliseconds as seconds with three decimals."""
    if current_time_ms < 0:
        raise ValueError(f"time must not be negative: {current_time_ms}")
    seconds, millis = divmod(int(current_time_ms), 1000)
    return f"{seconds}.{millis:03d}"


def _fit(text: object) -> str:
    return str(text)[:_TEXT_LIMIT]


class Printer:
    """Holds what the robot shows over serial and renders it on demand.

    Values stay on their row until replaced. Messages enter at the top and
    push older ones down; each shows for a set number of refreshes, or
    indefinitely when its time is 0.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.last_execution_time = -1
        self._clear()

    def _clear(self) -> None:
        self._values = [""] * MAX_ROW
        self._messages = [""] * MAX_ROW
        self._message_times = [0] * MAX_ROW

    @property
    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def init(self) -> None:
        """Clear all rows and announce the connection."""
        self._out.write("Serial connection started\n")
        self._clear()

    def print_value(self, row_number: int, value: object) -> None:
        """Show ``value`` on ``row_number`` until it is replaced."""
        if row_number >= MAX_ROW or row_number < 0:
            self.print_message(
                f"Row{row_number}is an invalid row number! Try again.", 15
            )
        else:
            self._values[row_number] = _fit(value)

    def print_message(self, message: object, message_time: int) -> None:
        """Add a message at the top, shown for ``message_time`` refreshes."""
        carried = [
            (text, time)
            for text, time in zip(self._messages, self._message_times)
            if text
        ]
        rows = [(_fit(message), int(message_time)), *carried][:MAX_ROW]
        rows += [("", 0)] * (MAX_ROW - len(rows))
        # the bottom row is never refreshed, so at most MAX_ROW - 1 messages show
        for row, (text, time) in enumerate(rows[: MAX_ROW - 1]):
            self._messages[row] = text
            self._message_times[row] = time

    def render(self, current_time_ms: int) -> str:
        """Return the screen text for the given time without ageing messages."""
        stamp = format_time(current_time_ms)
        lines = [""] * _CLEAR_LINES
        lines.append(f"Messages at {stamp} seconds:")
        lines.extend(f"  {text}" for text in reversed(self._messages))
        lines.append("")
        lines.append(f"Values at {stamp} seconds:")
        lines.extend(f"  {text}" for text in self._values)
        return "\n".join(lines) + "\n"

    def print_to_serial(self, current_time_ms: int) -> None:
        """Write the screen to the stream, then age the messages by one refresh."""
        out = self._out
        out.write(self.render(current_time_ms))
        out.flush()
        self._age_messages()

    def _age_messages(self) -> None:
        for row, time in enumerate(self._message_times):
            if time > 0:
                self._message_times[row] = time - 1
            if time == 1:
                self._messages[row] = ""