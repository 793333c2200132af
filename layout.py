import logging
from dataclasses import dataclass

from column_profile import TableProfile
from display_width import dsplen, split_first_line
from errors import LayoutConfigError
from render_buffer import LineBuffer, RenderBuffer
from row_store import Row, RowStore

logger = logging.getLogger("csvgrid.layout")

BORDER_NONE = 0
BORDER_SINGLE = 1
BORDER_DOUBLE = 2

LINESTYLE_ASCII = "a"
LINESTYLE_UNICODE = "u"


@dataclass(frozen=True)
class RuleGlyphs:
    left: bytes
    middle: bytes
    right: bytes
    horizontal: bytes


@dataclass(frozen=True)
class GlyphSet:
    vertical: bytes
    continuation: bytes
    top: RuleGlyphs
    head: RuleGlyphs
    double_head: RuleGlyphs
    bottom: RuleGlyphs


_ASCII_RULE = RuleGlyphs(b"+", b"+", b"+", b"-")

ASCII_GLYPHS = GlyphSet(
    vertical=b"|",
    continuation=b"+",
    top=_ASCII_RULE,
    head=_ASCII_RULE,
    double_head=RuleGlyphs(b":", b":", b":", b"="),
    bottom=_ASCII_RULE,
)

UNICODE_GLYPHS = GlyphSet(
    vertical="│".encode(),
    continuation="↵".encode(),
    top=RuleGlyphs("┌".encode(), "┬".encode(), "┐".encode(), "─".encode()),
    head=RuleGlyphs("├".encode(), "┼".encode(), "┤".encode(), "─".encode()),
    double_head=RuleGlyphs("╞".encode(), "╪".encode(), "╡".encode(), "═".encode()),
    bottom=RuleGlyphs("└".encode(), "┴".encode(), "┘".encode(), "─".encode()),
)


@dataclass(frozen=True)
class TableLayoutConfig:
    border: int = BORDER_SINGLE
    linestyle: str = LINESTYLE_UNICODE
    double_header: bool = False

    def __post_init__(self):
        if self.border not in (BORDER_NONE, BORDER_SINGLE, BORDER_DOUBLE):
            raise LayoutConfigError(f"unknown border style {self.border!r}")
        if self.linestyle not in (LINESTYLE_ASCII, LINESTYLE_UNICODE):
            raise LayoutConfigError(f"unknown line style {self.linestyle!r}")

    @property
    def glyphs(self) -> GlyphSet:
        return ASCII_GLYPHS if self.linestyle == LINESTYLE_ASCII else UNICODE_GLYPHS


@dataclass
class RenderResult:
    lines: LineBuffer
    flushed_rows: int = 0
    maxbytes: int = 0
    printed_headline: bool = False
    printed_rows: int = 0
    title_row: int | None = None
    top_border_row: int | None = None
    header_row: int | None = None
    header_rule_row: int | None = None
    first_data_row: int | None = None
    bottom_border_row: int | None = None
    footer_row: int | None = None


class TablePrinter:
    """Lays out a RowStore as fixed-width, border-decorated lines."""

    def __init__(self, config: TableLayoutConfig, force8bit: bool = False):
        self.config = config
        self.force8bit = force8bit
        self.glyphs = config.glyphs

    def render(self, store: RowStore, profile: TableProfile, title: str | None = None) -> RenderResult:
        buf = RenderBuffer()
        result = RenderResult(lines=buf.lines)

        if title:
            buf.write(title.encode("utf-8"))
            result.title_row = buf.flush_line()

        if self.config.border == BORDER_DOUBLE:
            result.top_border_row = self._print_rule(buf, profile, self.glyphs.top)

        # the rule follows every physical line of the header row and the
        # footer counts logical rows, not physical lines
        printed_rows = 0
        for row in store:
            isheader = printed_rows == 0 and profile.has_header
            first_line = self._print_row(buf, row, profile, isheader)

            if isheader:
                result.header_row = first_line
                rule = self.glyphs.double_head if self.config.double_header else self.glyphs.head
                result.header_rule_row = self._print_rule(buf, profile, rule)
                result.printed_headline = True
            elif result.first_data_row is None:
                result.first_data_row = first_line

            printed_rows += 1

        if self.config.border == BORDER_DOUBLE:
            result.bottom_border_row = self._print_rule(buf, profile, self.glyphs.bottom)

        result.printed_rows = printed_rows - (1 if result.printed_headline else 0)
        buf.write(f"({result.printed_rows} rows)".encode("ascii"))
        result.footer_row = buf.flush_line()

        result.flushed_rows = buf.flushed_rows
        result.maxbytes = buf.maxbytes
        logger.debug(
            "rendered %d lines for %d data rows, widest line %d bytes",
            result.flushed_rows,
            result.printed_rows,
            result.maxbytes,
        )
        return result

    def _print_rule(self, buf: RenderBuffer, profile: TableProfile, glyphs: RuleGlyphs) -> int:
        border = self.config.border
        hh = glyphs.horizontal

        if border == BORDER_DOUBLE:
            buf.write(glyphs.left)
            buf.write(hh)
        elif border == BORDER_SINGLE:
            buf.write(hh)

        for i, col in enumerate(profile.columns):
            if i > 0:
                if border == BORDER_NONE:
                    buf.write(b" ")
                else:
                    buf.write(hh + glyphs.middle + hh)
            buf.write_repeat(col.width, hh)

        if border == BORDER_DOUBLE:
            buf.write(hh)
            buf.write(glyphs.right)
        elif border == BORDER_SINGLE:
            buf.write(hh)
        elif profile.last_column_multiline:
            buf.write(b" ")

        return buf.flush_line()

    def _field_width(self, segment: bytes) -> int:
        return dsplen(segment, self.force8bit)

    def _print_row(self, buf: RenderBuffer, row: Row, profile: TableProfile, isheader: bool) -> int:
        """Emit every physical line of one row; return the first line's index."""
        border = self.config.border
        vsep = self.glyphs.vertical + b" "
        last_column = profile.nfields - 1
        last_multiline = profile.last_column_multiline

        pending: list[bytes | None] = list(row.fields)[: profile.nfields]
        first_line = None
        more_lines = True

        while more_lines:
            more_lines = False

            if border == BORDER_DOUBLE:
                buf.write(vsep)
            elif border == BORDER_SINGLE:
                buf.write(b" ")

            for j, field in enumerate(pending):
                col = profile.columns[j]
                continues = False

                if j > 0 and border != BORDER_NONE:
                    buf.write(vsep)

                if field:
                    segment, rest = split_first_line(field)
                    continues = rest is not None
                    more_lines |= continues
                    pending[j] = rest

                    spaces = col.width - self._field_width(segment)
                    # known gap: some multi-byte/multi-line combinations overshoot
                    if spaces < 0:
                        spaces = 0

                    if isheader:
                        buf.spaces(spaces // 2)
                    elif col.numeric:
                        buf.spaces(spaces)

                    buf.write(segment)

                    if isheader:
                        buf.spaces(spaces - spaces // 2)
                    elif not col.numeric:
                        buf.spaces(spaces)
                else:
                    pending[j] = None
                    buf.spaces(col.width)

                if continues:
                    buf.write(self.glyphs.continuation)
                elif border != BORDER_NONE or j < last_column or last_multiline:
                    buf.write(b" ")

            for j in range(len(pending), profile.nfields):
                if j > 0 and border != BORDER_NONE:
                    buf.write(vsep)
                addspace = border != BORDER_NONE or j < last_column or last_multiline
                buf.spaces(profile.columns[j].width + (1 if addspace else 0))

            if border == BORDER_DOUBLE:
                buf.write(self.glyphs.vertical)

            line_no = buf.flush_line()
            if first_line is None:
                first_line = line_no

        return first_line
