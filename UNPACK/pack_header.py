from typing import BinaryIO, List

from pack_errors import (
    InvalidTreeDepth, IoFailure, SymbolTableOverflow, TruncatedSymbolTable,
)

# pack(1) layout:
# levels(u8) counts(u8 * levels) symbols(u8 * (sum(counts) + 1)) payload
# The last level's count is stored minus 2 (real symbols + EOB), so the
# symbol table carries count + 1 bytes for it and EOB is never stored.
PACK_HEADER_LENGTH = 1
HTREE_MAXLEVEL = 24
MAX_SYMBOLS = 256   # byte symbols + EOB


def read_exact(f: BinaryIO, n: int, what: str) -> bytes:
    """Read exactly n bytes; raw and pipe streams may return short reads."""
    buf = bytearray()
    while len(buf) < n:
        try:
            data = f.read(n - len(buf))
        except OSError as exc:
            raise IoFailure(f"Error reading {what}: {exc}") from exc
        if not data:
            raise TruncatedSymbolTable(f"Malformed stream: {what} truncated")
        buf += data
    return bytes(buf)


def read_levels(f: BinaryIO, pre: bytes = b"") -> int:
    """
    Read the header byte (tree depth). 'pre' holds header bytes the caller
    already consumed from the stream.
    """
    if len(pre) > PACK_HEADER_LENGTH:
        raise ValueError(f"at most {PACK_HEADER_LENGTH} pre-read header byte(s)")
    hdr = bytes(pre)
    if len(hdr) < PACK_HEADER_LENGTH:
        hdr += read_exact(f, PACK_HEADER_LENGTH - len(hdr), "pack header")
    levels = hdr[0]
    if not (1 <= levels <= HTREE_MAXLEVEL):
        raise InvalidTreeDepth(f"Huffman tree has insane levels: {levels}")
    return levels


def read_level_counts(f: BinaryIO, levels: int) -> List[int]:
    counts = list(read_exact(f, levels, "symbol count table"))
    capacity = 1 + sum(counts)
    if capacity > MAX_SYMBOLS:
        raise SymbolTableOverflow(f"Bad symbol table: {capacity} symbols > {MAX_SYMBOLS}")
    return counts


def read_symbol_table(f: BinaryIO, capacity: int) -> bytes:
    return read_exact(f, capacity, "symbol table")
