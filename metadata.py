import logging
import os
from dataclasses import dataclass, field

from column_profile import TableProfile
from display_width import char_width, decode, dsplen
from layout import BORDER_DOUBLE, BORDER_NONE, BORDER_SINGLE, RenderResult, TableLayoutConfig
from render_buffer import LineBuffer

logger = logging.getLogger("csvgrid.metadata")

FILENAME_MAX = 64

_RULE_DATA = frozenset("-=─═")
_RULE_LEFT = frozenset("├╞┌└")
_RULE_RIGHT = frozenset("┤╡┐┘")


@dataclass
class CRange:
    """Display-column span of one logical column.

    ``xmin``/``xmax`` bound the column body including the separator cells
    shared with its neighbours; ``name_pos``/``name_size`` locate the
    column name in the names line and stay None without a header.
    """

    xmin: int = 0
    xmax: int = 0
    name_pos: int | None = None
    name_size: int | None = None


@dataclass
class DataDesc:
    rows: LineBuffer = field(default_factory=LineBuffer)
    filename: str = ""
    title: str = ""
    title_rows: int = 0
    border_type: int = BORDER_SINGLE
    linestyle: str = "u"

    total_rows: int = 0
    last_row: int | None = None
    maxy: int | None = None
    maxx: int | None = None
    maxbytes: int | None = None

    first_data_row: int | None = None
    last_data_row: int | None = None
    border_top_row: int | None = None
    border_head_row: int | None = None
    border_bottom_row: int | None = None
    footer_row: int | None = None
    footer_rows: int = 0

    namesline: bytes | None = None
    headline: bytes | None = None
    headline_size: int = 0
    headline_char_size: int = 0
    headline_transl: str | None = None

    columns: int = 0
    cranges: list[CRange] = field(default_factory=list)

    @property
    def has_header(self) -> bool:
        return self.headline is not None


def synthesize_translation(widths: list[int], border: int) -> str:
    """Translation table for a table rendered without a header line."""
    parts = []
    if border == BORDER_SINGLE:
        parts.append("d")
    elif border == BORDER_DOUBLE:
        parts.append("Ld")

    for i, width in enumerate(widths):
        if i > 0:
            parts.append("dId" if border != BORDER_NONE else "I")
        parts.append("d" * width)

    if border == BORDER_SINGLE:
        parts.append("d")
    elif border == BORDER_DOUBLE:
        parts.append("dR")

    return "".join(parts)


def translate_headline(headline: bytes, border: int, force8bit: bool = False) -> str:
    """Translation table read off a rendered header rule line."""
    text = decode(headline, force8bit)
    last = len(text) - 1
    out = []
    for i, ch in enumerate(text):
        if ch in _RULE_DATA:
            out.append("d")
        elif ch in _RULE_LEFT or (border == BORDER_DOUBLE and i == 0):
            out.append("L")
        elif ch in _RULE_RIGHT or (border == BORDER_DOUBLE and i == last):
            out.append("R")
        elif ch == " " and i == last:
            out.append("d")
        else:
            out.append("I")
    return "".join(out)


def column_ranges(transl: str, ncols: int) -> list[CRange]:
    if ncols == 0:
        return []

    ranges = []
    xmin = 0
    for k, ch in enumerate(transl):
        if ch == "I":
            ranges.append(CRange(xmin=xmin, xmax=k))
            xmin = k
    ranges.append(CRange(xmin=xmin, xmax=len(transl) - 1))
    return ranges


def _locate_names(namesline: bytes, cranges: list[CRange], vertical: str, force8bit: bool) -> None:
    text = decode(namesline, force8bit)
    cells = []
    x = 0
    for ch in text:
        w = 1 if force8bit else char_width(ch)
        cells.append((x, w, ch))
        x += w

    for crange in cranges:
        start = None
        end = None
        for x, w, ch in cells:
            if x < crange.xmin or x > crange.xmax:
                continue
            if ch.isspace() or ch == vertical:
                continue
            if start is None:
                start = x
            end = x + w
        if start is not None:
            crange.name_pos = start
            crange.name_size = end - start


def assemble_metadata(
    result: RenderResult,
    profile: TableProfile,
    config: TableLayoutConfig,
    force8bit: bool = False,
    title: str | None = None,
    pathname: str | None = None,
) -> DataDesc:
    desc = DataDesc(rows=result.lines)
    desc.border_type = config.border
    desc.linestyle = config.linestyle
    desc.maxbytes = result.maxbytes
    desc.columns = profile.nfields
    if pathname:
        desc.filename = os.path.basename(pathname)[:FILENAME_MAX]
    if title:
        desc.title = title
        desc.title_rows = 1

    desc.total_rows = result.flushed_rows
    desc.last_row = desc.total_rows - 1
    desc.maxy = desc.total_rows - 1
    desc.footer_row = result.footer_row
    desc.footer_rows = 1

    if config.border == BORDER_DOUBLE:
        desc.border_top_row = result.top_border_row
        desc.border_bottom_row = result.bottom_border_row
        desc.last_data_row = desc.total_rows - 2 - 1
    else:
        desc.last_data_row = desc.total_rows - 1 - 1

    if result.printed_headline:
        desc.namesline = result.lines.line(result.header_row)
        desc.headline = result.lines.line(result.header_rule_row)
        desc.border_head_row = result.header_rule_row
        desc.first_data_row = result.header_rule_row + 1

        desc.headline_size = len(desc.headline)
        desc.headline_char_size = dsplen(desc.headline, force8bit)
        desc.headline_transl = translate_headline(desc.headline, config.border, force8bit)
        desc.cranges = column_ranges(desc.headline_transl, desc.columns)
        vertical = config.glyphs.vertical.decode("utf-8")
        _locate_names(desc.namesline, desc.cranges, vertical, force8bit)
    else:
        desc.headline_transl = synthesize_translation(profile.widths, config.border)
        desc.headline_char_size = len(desc.headline_transl)
        desc.cranges = column_ranges(desc.headline_transl, desc.columns)
        if result.first_data_row is not None:
            desc.first_data_row = result.first_data_row
        else:
            desc.first_data_row = desc.title_rows + (1 if config.border == BORDER_DOUBLE else 0)

    desc.maxx = desc.headline_char_size
    logger.debug(
        "metadata: %d lines, header=%s, data rows %s..%s",
        desc.total_rows,
        desc.has_header,
        desc.first_data_row,
        desc.last_data_row,
    )
    return desc
