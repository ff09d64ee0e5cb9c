class UnpackError(ValueError):
    """Base class for every failure of a pack(1) decode pass."""


class InvalidTreeDepth(UnpackError):
    pass


class SymbolTableOverflow(UnpackError):
    pass


class TruncatedSymbolTable(UnpackError):
    pass


class CorruptCode(UnpackError):
    pass


class PrematureEndOfStream(UnpackError):
    pass


class IoFailure(UnpackError, OSError):
    """Transport-level read/write error raised by one of the streams."""
