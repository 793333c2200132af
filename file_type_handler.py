import os
import zipfile
from typing import BinaryIO

import pandas as pd

from dataframe_source import rows_from_dataframe
from errors import UnsupportedFormatError
from formatter import FormatResult, read_and_format
from options import Options


class FileTypeHandler:
    """Routes an input path to the CSV parser or a pandas loader."""

    FRAME_EXTENSIONS = {".parquet", ".xlsx", ".h5"}

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

    @property
    def is_text(self) -> bool:
        return self.ext not in self.FRAME_EXTENSIONS

    def open(self) -> BinaryIO:
        return open(self.path, "rb")

    def load_frame(self) -> pd.DataFrame:
        if self.ext == ".parquet":
            self._ensure_parquet_engine()
            return pd.read_parquet(self.path)
        elif self.ext == ".xlsx":
            self._ensure_excel_engine()
            sheets = pd.read_excel(self.path, sheet_name=None)
            return next(iter(sheets.values()), pd.DataFrame())
        elif self.ext == ".h5":
            self._ensure_hdf_engine()
            with pd.HDFStore(self.path, mode="r") as store:
                keys = store.keys()
                if not keys:
                    return pd.DataFrame()
                return store.get(keys[0])

        raise UnsupportedFormatError(f"{self.path} is not a table file (use .parquet, .xlsx, or .h5)")

    def format(self, options: Options) -> FormatResult:
        if self.is_text:
            with self.open() as stream:
                return read_and_format(stream, options)

        try:
            df = self.load_frame()
        except (UnsupportedFormatError, ValueError, OSError, RuntimeError, ImportError, zipfile.BadZipFile) as exc:
            return FormatResult(ok=False, error=f"cannot load {self.path}: {exc}")
        source = rows_from_dataframe(df, force8bit=options.force8bit)
        return read_and_format(None, options, source=source)

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401

            return
        except ImportError:
            pass
        raise UnsupportedFormatError("Parquet support requires pyarrow. Install via: pip install pyarrow")

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401

            return
        except ImportError:
            pass
        raise UnsupportedFormatError("XLSX support requires openpyxl. Install via: pip install openpyxl")

    def _ensure_hdf_engine(self):
        try:
            import tables  # type: ignore  # noqa: F401

            return
        except ImportError:
            pass
        raise UnsupportedFormatError("HDF5 support requires tables. Install via: pip install tables")
