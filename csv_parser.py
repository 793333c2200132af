import logging
from typing import BinaryIO

from byte_accumulator import DEFAULT_MAX_COLUMNS, ByteAccumulator, ColumnStats
from display_width import measure_field, utf8_char_len
from errors import BrokenCharacterError
from row_store import Row, RowStore

logger = logging.getLogger("csvgrid.parser")

EOF = -1
NL = 0x0A
CR = 0x0D
SPACE = 0x20
QUOTE = 0x22
AUTO_SEPARATORS = frozenset(b",;|")


class ByteReader:
    """Chunked byte source with a single byte of push-back."""

    def __init__(self, stream: BinaryIO, chunk_size: int = 64 * 1024):
        self.stream = stream
        self.chunk_size = chunk_size
        self._chunk = b""
        self._pos = 0
        self._pushed = None
        self.offset = 0

    def getc(self) -> int:
        if self._pushed is not None:
            c, self._pushed = self._pushed, None
            self.offset += 1
            return c
        if self._pos >= len(self._chunk):
            self._chunk = self.stream.read(self.chunk_size)
            self._pos = 0
            if not self._chunk:
                return EOF
        c = self._chunk[self._pos]
        self._pos += 1
        self.offset += 1
        return c

    def ungetc(self, c: int) -> None:
        if c == EOF:
            return
        self._pushed = c
        self.offset -= 1


def _separator_byte(separator) -> int | None:
    if separator is None:
        return None
    if isinstance(separator, int):
        return separator
    if isinstance(separator, str):
        separator = separator.encode("utf-8")
    if len(separator) != 1:
        raise ValueError(f"separator must be a single byte, got {separator!r}")
    return separator[0]


class CsvParser:
    """Single pass CSV reader feeding a RowStore and running ColumnStats.

    ``separator`` of None switches on auto-detection: the first ``,``,
    ``;`` or ``|`` seen outside quotes fixes the separator for the rest of
    the stream.
    """

    def __init__(self, separator=None, force8bit: bool = False, max_columns: int = DEFAULT_MAX_COLUMNS):
        self.separator = _separator_byte(separator)
        self.force8bit = force8bit
        self.max_columns = max_columns
        self.stats = ColumnStats(max_columns)
        self.detected_separator: int | None = None

    def parse(self, stream: BinaryIO, store: RowStore | None = None) -> RowStore:
        store = store if store is not None else RowStore()
        reader = ByteReader(stream)
        acc = ByteAccumulator(self.max_columns)
        sep = self.separator

        skip_initial = True
        first_nw = 0
        last_nw = 0
        pos = 0
        instr = False
        closed = False

        c = reader.getc()
        while not closed:
            if c == CR and not instr:
                c2 = reader.getc()
                if c2 == NL:
                    c = NL
                else:
                    reader.ungetc(c2)

            if c != EOF and (c != NL or instr):
                if skip_initial:
                    if c == SPACE:
                        c = reader.getc()
                        continue
                    skip_initial = False
                    last_nw = first_nw

                if c == QUOTE:
                    if instr:
                        c2 = reader.getc()
                        if c2 == QUOTE:
                            acc.append(c)
                            pos += 1
                        else:
                            reader.ungetc(c2)
                            instr = False
                    else:
                        instr = True
                else:
                    acc.append(c)
                    pos += 1

                if sep is None and not instr and c in AUTO_SEPARATORS:
                    sep = c
                    self.detected_separator = c
                    logger.debug("detected separator %r", chr(c))

                if sep is not None and c == sep and not instr:
                    acc.close_field(first_nw, last_nw - first_nw)
                    skip_initial = True
                    first_nw = pos
                elif instr or c != SPACE:
                    last_nw = pos

                nbytes = 1 if self.force8bit else utf8_char_len(c)
                if nbytes > 1:
                    for _ in range(1, nbytes):
                        c = reader.getc()
                        if c == EOF:
                            raise BrokenCharacterError(reader.offset)
                        acc.append(c)
                        pos += 1
                    last_nw = pos
            else:
                if skip_initial:
                    acc.close_field(None, 0)
                else:
                    acc.close_field(first_nw, last_nw - first_nw)

                if acc.used:
                    store.append(self._make_row(acc))

                acc.reset()
                self.stats.processed += 1

                skip_initial = True
                first_nw = 0
                last_nw = 0
                pos = 0

                closed = c == EOF

            c = reader.getc()

        logger.debug(
            "parsed %d rows, %d columns, %d records",
            store.nrows,
            self.stats.maxfields,
            self.stats.processed,
        )
        return store

    def _make_row(self, acc: ByteAccumulator) -> Row:
        fields = acc.fields()
        multiline = False
        for i, field in enumerate(fields):
            measure = measure_field(field, self.force8bit)
            self.stats.record(i, field, measure)
            multiline |= measure.multiline
        self.stats.note_row(len(fields))
        return Row.from_fields(fields, multiline)


def parse_csv(stream: BinaryIO, separator=None, force8bit: bool = False,
              max_columns: int = DEFAULT_MAX_COLUMNS) -> tuple[RowStore, ColumnStats]:
    parser = CsvParser(separator, force8bit, max_columns)
    store = parser.parse(stream)
    return store, parser.stats
