from row_store import BucketList


class LineBuffer(BucketList):
    """Chunked list of rendered output lines (``bytes``)."""

    def line(self, idx: int) -> bytes:
        if idx < 0:
            raise IndexError(idx)
        for bucket in self.buckets():
            if idx < len(bucket.items):
                return bucket.items[idx]
            idx -= len(bucket.items)
        raise IndexError(idx)

    def lines(self) -> list[bytes]:
        return list(self)


class RenderBuffer:
    """Bytes of the output line under construction.

    Contents between flushes are exactly one terminal line; ``flush_line``
    hands an owned copy to the line buffer.
    """

    def __init__(self, lines: LineBuffer | None = None):
        self.buffer = bytearray()
        self.lines = lines if lines is not None else LineBuffer()
        self.flushed_rows = 0
        self.maxbytes = 0

    def write(self, data: bytes) -> None:
        self.buffer += data

    def write_repeat(self, n: int, data: bytes) -> None:
        if n > 0:
            self.buffer += data * n

    def spaces(self, n: int) -> None:
        self.write_repeat(n, b" ")

    def flush_line(self) -> int:
        """Append the current line to the output and return its index."""
        line = bytes(self.buffer)
        self.lines.append(line)
        if len(line) > self.maxbytes:
            self.maxbytes = len(line)
        self.buffer.clear()
        self.flushed_rows += 1
        return self.flushed_rows - 1
