
import numpy as np

from display_width import FieldMeasure
from errors import CapacityError


DEFAULT_MAX_COLUMNS = 1024
INITIAL_COLUMNS = 16


class ColumnStats:
    """Running per-column statistics, kept for the whole parse."""

    _COUNTERS = ("digits", "tsizes", "firstdigit", "widths")

    def __init__(self, max_columns: int = DEFAULT_MAX_COLUMNS):
        self.max_columns = max_columns
        self.maxfields = 0
        # every record terminator, blank lines and end of stream included
        self.processed = 0

        self.digits = np.zeros(0, dtype=np.int64)
        self.tsizes = np.zeros(0, dtype=np.int64)
        self.firstdigit = np.zeros(0, dtype=np.int64)
        self.widths = np.zeros(0, dtype=np.int64)
        self.multilines = np.zeros(0, dtype=bool)

    @property
    def capacity(self) -> int:
        return len(self.widths)

    def ensure_columns(self, ncols: int) -> None:
        if ncols > self.max_columns:
            raise CapacityError(self.max_columns)
        if ncols <= self.capacity:
            return

        size = min(self.max_columns, max(ncols, INITIAL_COLUMNS, self.capacity * 2))
        for name in self._COUNTERS:
            old = getattr(self, name)
            grown = np.zeros(size, dtype=np.int64)
            grown[: len(old)] = old
            setattr(self, name, grown)
        grown = np.zeros(size, dtype=bool)
        grown[: len(self.multilines)] = self.multilines
        self.multilines = grown

    def record(self, col: int, field: bytes, measure: FieldMeasure) -> None:
        self.ensure_columns(col + 1)

        # the first physical record may be a header, keep it out of type stats
        if self.processed > 0:
            self.tsizes[col] += measure.total
            self.digits[col] += measure.digits
            if field[:1].isdigit():
                self.firstdigit[col] += 1

        if measure.width > self.widths[col]:
            self.widths[col] = measure.width
        if measure.multiline:
            self.multilines[col] = True

    def note_row(self, nfields: int) -> None:
        if nfields > self.maxfields:
            self.maxfields = nfields

    def column_widths(self) -> list[int]:
        return [int(w) for w in self.widths[: self.maxfields]]

    def column_multilines(self) -> list[bool]:
        return [bool(m) for m in self.multilines[: self.maxfields]]


class ByteAccumulator:
    """Raw bytes of the row being parsed plus its field slices."""

    def __init__(self, max_columns: int = DEFAULT_MAX_COLUMNS):
        self.max_columns = max_columns
        self.buffer = bytearray()
        self.starts: list[int | None] = []
        self.sizes: list[int] = []

    @property
    def used(self) -> int:
        return len(self.buffer)

    def append(self, byte: int) -> None:
        self.buffer.append(byte)

    def close_field(self, start: int | None, size: int) -> None:
        """Close the current field; ``start`` is None for an absent field."""
        if len(self.sizes) >= self.max_columns:
            raise CapacityError(self.max_columns)
        if start is None:
            size = 0
        self.starts.append(start)
        self.sizes.append(size)

    def fields(self) -> list[bytes]:
        out = []
        for start, size in zip(self.starts, self.sizes):
            if start is None or size <= 0:
                out.append(b"")
            else:
                out.append(bytes(self.buffer[start : start + size]))
        return out

    def reset(self) -> None:
        self.buffer.clear()
        self.starts.clear()
        self.sizes.clear()
