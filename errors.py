class CsvGridError(Exception):
    """Base class for conditions that abort a formatting pass."""


class FatalResourceError(CsvGridError):
    pass


class CapacityError(CsvGridError):
    def __init__(self, max_columns: int):
        super().__init__(f"too many columns (limit is {max_columns})")
        self.max_columns = max_columns


class BrokenCharacterError(CsvGridError):
    def __init__(self, offset: int | None = None):
        super().__init__("unexpected quit, broken unicode char")
        self.offset = offset


class UnsupportedFormatError(CsvGridError):
    pass


class LayoutConfigError(CsvGridError, ValueError):
    pass
