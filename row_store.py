from typing import Iterable, Iterator

BUCKET_CAPACITY = 1000


class Row:
    """One parsed record.

    All fields live back to back in a single immutable ``bytes`` block, each
    followed by a NUL byte; ``bounds`` holds the ``(offset, length)`` slice of
    every field inside that block.
    """

    __slots__ = ("_data", "_bounds", "multiline")

    def __init__(self, data: bytes, bounds: tuple[tuple[int, int], ...], multiline: bool = False):
        self._data = data
        self._bounds = bounds
        self.multiline = multiline

    @classmethod
    def from_fields(cls, fields: Iterable[bytes], multiline: bool | None = None) -> "Row":
        block = bytearray()
        bounds = []
        for field in fields:
            bounds.append((len(block), len(field)))
            block += field
            block.append(0)
        if multiline is None:
            multiline = b"\n" in block
        return cls(bytes(block), tuple(bounds), multiline)

    @property
    def nfields(self) -> int:
        return len(self._bounds)

    def field(self, idx: int) -> bytes:
        offset, length = self._bounds[idx]
        return self._data[offset : offset + length]

    @property
    def fields(self) -> tuple[bytes, ...]:
        return tuple(self.field(i) for i in range(len(self._bounds)))

    def __len__(self):
        return len(self._bounds)

    def __iter__(self):
        for i in range(len(self._bounds)):
            yield self.field(i)

    def __repr__(self):
        return f"Row({list(self.fields)!r}, multiline={self.multiline})"


class Bucket:
    __slots__ = ("items", "next_bucket")

    def __init__(self):
        self.items: list = []
        self.next_bucket: "Bucket | None" = None

    @property
    def full(self) -> bool:
        return len(self.items) >= BUCKET_CAPACITY


class BucketList:
    """Append-only chain of fixed-capacity buckets.

    Only the last bucket accepts new items; earlier buckets are full and
    never touched again. Iteration always restarts from the first bucket.
    """

    def __init__(self):
        self.first = Bucket()
        self.last = self.first
        self._count = 0

    def append(self, item) -> None:
        if self.last.full:
            bucket = Bucket()
            self.last.next_bucket = bucket
            self.last = bucket
        self.last.items.append(item)
        self._count += 1

    def buckets(self) -> Iterator[Bucket]:
        bucket = self.first
        while bucket is not None:
            yield bucket
            bucket = bucket.next_bucket

    def __iter__(self):
        for bucket in self.buckets():
            yield from bucket.items

    def __len__(self):
        return self._count

    def head(self, n: int) -> list:
        out = []
        for item in self:
            if len(out) >= n:
                break
            out.append(item)
        return out


class RowStore(BucketList):
    @property
    def nrows(self) -> int:
        return len(self)
