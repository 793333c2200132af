import logging
import sys
from dataclasses import dataclass
from typing import BinaryIO

from column_profile import TableProfile, build_profile
from csv_parser import CsvParser
from errors import CsvGridError, FatalResourceError
from layout import TablePrinter
from metadata import DataDesc, assemble_metadata
from options import Options
from row_store import RowStore

logger = logging.getLogger("csvgrid.formatter")


@dataclass
class FormatResult:
    ok: bool
    desc: DataDesc | None = None
    error: str | None = None

    @property
    def lines(self) -> list[bytes]:
        return self.desc.rows.lines() if self.desc is not None else []


def render_table(store: RowStore, profile: TableProfile, options: Options) -> DataDesc:
    config = options.layout_config()
    printer = TablePrinter(config, force8bit=options.force8bit)
    result = printer.render(store, profile, title=options.title)
    return assemble_metadata(
        result,
        profile,
        config,
        force8bit=options.force8bit,
        title=options.title,
        pathname=options.pathname,
    )


def _format(stream, options: Options, source) -> DataDesc:
    try:
        if source is not None:
            store, profile = source
        else:
            parser = CsvParser(options.separator, options.force8bit, options.max_columns)
            store = parser.parse(stream)
            profile = build_profile(store, parser.stats)
        return render_table(store, profile, options)
    except MemoryError as exc:
        raise FatalResourceError("out of memory while formatting table") from exc


def read_and_format(
    stream: BinaryIO | None,
    options: Options | None = None,
    source: tuple[RowStore, TableProfile] | None = None,
) -> FormatResult:
    """Parse (or take pre-built rows), lay out and describe one table.

    ``source`` bypasses the CSV parser with rows and a profile produced
    elsewhere. A failure returns ``ok=False`` and never any partial output.
    """
    options = options or Options()
    if stream is None and source is None:
        stream = sys.stdin.buffer

    try:
        desc = _format(stream, options, source)
    except CsvGridError as exc:
        logger.error("formatting failed: %s", exc)
        return FormatResult(ok=False, error=str(exc))

    return FormatResult(ok=True, desc=desc)
