import unicodedata
from dataclasses import dataclass

NEWLINE = 0x0A
_DIGITS = frozenset(b"0123456789")
_STRUCTURAL = frozenset(b"-: ")


def utf8_char_len(lead: int) -> int:
    """Byte length of a UTF-8 sequence judged by its lead byte."""
    if lead & 0x80 == 0:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    category = unicodedata.category(ch)
    if category in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def decode(data: bytes, force8bit: bool = False) -> str:
    if force8bit:
        return data.decode("latin-1")
    return data.decode("utf-8", errors="replace")


def dsplen(data: bytes, force8bit: bool = False) -> int:
    """Display width of a single-line string."""
    if force8bit:
        return len(data)
    return sum(char_width(ch) for ch in decode(data))


@dataclass(frozen=True)
class FieldMeasure:
    width: int
    multiline: bool
    digits: int
    total: int


def measure_field(data: bytes, force8bit: bool = False) -> FieldMeasure:
    """Width of the widest embedded line plus digit statistics.

    ``total`` counts characters that are neither digits nor one of the
    structural characters ``-``, ``:`` and space. Counting is per byte in
    single-byte mode and per character otherwise.
    """
    width = 0
    multiline = False
    digits = 0
    total = 0

    if force8bit:
        for line in data.split(b"\n"):
            width = max(width, len(line))
        multiline = NEWLINE in data
        for b in data:
            if b in _DIGITS:
                digits += 1
            elif b not in _STRUCTURAL:
                total += 1
        return FieldMeasure(width, multiline, digits, total)

    cw = 0
    for ch in decode(data):
        if "0" <= ch <= "9":
            digits += 1
        elif ch not in "-: ":
            total += 1

        if ch == "\n":
            multiline = True
            width = max(width, cw)
            cw = 0
        else:
            cw += char_width(ch)
    width = max(width, cw)
    return FieldMeasure(width, multiline, digits, total)


def split_first_line(data: bytes) -> tuple[bytes, bytes | None]:
    """Return the first embedded line and the remainder after the newline.

    The remainder is ``None`` when ``data`` holds no newline.
    """
    idx = data.find(b"\n")
    if idx < 0:
        return data, None
    return data[:idx], data[idx + 1 :]
