import logging
from dataclasses import dataclass, field

import numpy as np

from byte_accumulator import ColumnStats
from row_store import RowStore

logger = logging.getLogger("csvgrid.profile")

NUMERIC = "d"
TEXT = "a"


@dataclass(frozen=True)
class ColumnProfile:
    width: int
    multiline: bool = False
    type: str = TEXT

    @property
    def numeric(self) -> bool:
        return self.type == NUMERIC


@dataclass(frozen=True)
class TableProfile:
    columns: tuple[ColumnProfile, ...] = field(default_factory=tuple)
    has_header: bool = False

    @property
    def nfields(self) -> int:
        return len(self.columns)

    @property
    def widths(self) -> list[int]:
        return [c.width for c in self.columns]

    @property
    def last_column_multiline(self) -> bool:
        return bool(self.columns) and self.columns[-1].multiline


def _starts_with_digit(value: bytes) -> bool:
    return value[:1].isdigit()


def is_header(store: RowStore) -> bool:
    """Best-effort guess whether the first row holds column names.

    The first row must be all non-empty, non-numeric looking fields and the
    second row must contain at least one empty or digit-led field.
    """
    head = store.head(2)
    if len(head) < 2:
        return False

    for value in head[0]:
        if value == b"" or _starts_with_digit(value):
            return False

    for value in head[1]:
        if value == b"" or _starts_with_digit(value):
            return True

    return False


def infer_types(stats: ColumnStats) -> list[str]:
    n = stats.maxfields
    digits = stats.digits[:n].astype(np.float64)
    tsizes = stats.tsizes[:n].astype(np.float64)
    firstdigit = stats.firstdigit[:n].astype(np.float64)
    rows = stats.processed - 1

    with np.errstate(divide="ignore", invalid="ignore"):
        firstdigit_ratio = firstdigit / rows if rows != 0 else np.full(n, np.nan)
        digit_ratio = digits / tsizes

    numeric = ((tsizes == 0) & (digits > 0)) | ((firstdigit > 0) & (rows == 1))
    numeric |= (firstdigit_ratio > 0.8) & (digit_ratio > 0.5)

    return [NUMERIC if flag else TEXT for flag in numeric]


def build_profile(store: RowStore, stats: ColumnStats) -> TableProfile:
    has_header = is_header(store)
    types = infer_types(stats)
    columns = tuple(
        ColumnProfile(width=w, multiline=m, type=t)
        for w, m, t in zip(stats.column_widths(), stats.column_multilines(), types)
    )
    logger.debug(
        "profile: %d columns, header=%s, types=%s",
        len(columns),
        has_header,
        "".join(types),
    )
    return TableProfile(columns=columns, has_header=has_header)
