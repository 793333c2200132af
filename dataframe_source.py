import logging

import pandas as pd

from column_profile import NUMERIC, TEXT, ColumnProfile, TableProfile
from display_width import measure_field
from row_store import Row, RowStore

logger = logging.getLogger("csvgrid.dataframe")


def _cell_bytes(value) -> bytes:
    if value is None:
        return b""
    try:
        if pd.isna(value):
            return b""
    except (TypeError, ValueError):
        pass
    return str(value).encode("utf-8")


def rows_from_dataframe(df: pd.DataFrame, force8bit: bool = False) -> tuple[RowStore, TableProfile]:
    """Build a RowStore and TableProfile from a DataFrame.

    Column names become the header row; numeric dtypes are right aligned.
    """
    store = RowStore()
    ncols = len(df.columns)
    widths = [0] * ncols
    multilines = [False] * ncols

    def add(values):
        fields = [_cell_bytes(v) for v in values]
        multiline = False
        for i, field in enumerate(fields):
            measure = measure_field(field, force8bit)
            widths[i] = max(widths[i], measure.width)
            multilines[i] |= measure.multiline
            multiline |= measure.multiline
        store.append(Row.from_fields(fields, multiline))

    add(df.columns)
    for values in df.itertuples(index=False, name=None):
        add(values)

    types = [
        NUMERIC
        if pd.api.types.is_numeric_dtype(dtype) and not pd.api.types.is_bool_dtype(dtype)
        else TEXT
        for dtype in df.dtypes
    ]
    columns = tuple(
        ColumnProfile(width=w, multiline=m, type=t)
        for w, m, t in zip(widths, multilines, types)
    )
    logger.debug("dataframe source: %d rows, %d columns", len(df), ncols)
    return store, TableProfile(columns=columns, has_header=True)
