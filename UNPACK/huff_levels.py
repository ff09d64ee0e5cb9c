from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

import numpy as np

from pack_header import read_levels, read_level_counts, read_symbol_table

log = logging.getLogger(__name__)


@dataclass
class TreeDescriptor:
    """
    Canonical Huffman tree of a packed file, stored per level the way
    pack(1) stores it: no node pointers, only counts and a flat symbol table.

    At level L (codes of L+1 bits) codes 0..inodes_in[L]-1 are internal
    nodes and the next symbols_in[L] codes are leaves, whose symbols sit at
    symbol_table[level_offsets[L]:]. The EOB leaf is the slot right after
    the last stored symbol (eob_index) and has no byte of its own.
    """
    levels: int
    symbols_in: np.ndarray      # int32 (levels,) leaf count per level, EOB included
    inodes_in: np.ndarray       # int32 (levels,) internal node count per level
    symbol_table: np.ndarray    # uint8 (capacity,)
    level_offsets: np.ndarray   # int32 (levels,)
    uncompressed_size: Optional[int] = None

    @property
    def max_level(self) -> int:
        return self.levels - 1

    @property
    def eob_index(self) -> int:
        return int(self.symbol_table.size)


def fill_internal_nodes(symbols_in: np.ndarray) -> np.ndarray:
    """
    Each internal node at level L has exactly two children at L+1, so it
    is half of all nodes (internal + leaf) one level down. The deepest
    level is all leaves.
    """
    n = symbols_in.size
    inodes = np.zeros(n, dtype=np.int32)
    for level in range(n - 2, -1, -1):
        inodes[level] = (int(inodes[level + 1]) + int(symbols_in[level + 1])) // 2
    return inodes


def build_tree(f: BinaryIO, pre: bytes = b"",
               uncompressed_size: Optional[int] = None) -> TreeDescriptor:
    """
    Parse header, level count table and symbol table; leaves 'f' at the
    first payload byte.
    """
    levels = read_levels(f, pre)
    counts = np.array(read_level_counts(f, levels), dtype=np.int32)
    last = levels - 1

    # Symbol table sizing: the last level carries its real symbols (count + 1).
    stored_per_level = counts.copy()
    stored_per_level[last] += 1
    symbol_table_capacity = int(stored_per_level.sum())
    table = np.frombuffer(read_symbol_table(f, symbol_table_capacity), dtype=np.uint8)

    level_offsets = np.zeros(levels, dtype=np.int32)
    level_offsets[1:] = np.cumsum(stored_per_level)[:-1]

    # Decode comparisons: the last level also holds the EOB leaf (count + 2).
    symbols_in = stored_per_level.copy()
    symbols_in[last] += 1

    inodes_in = fill_internal_nodes(symbols_in)
    log.debug("pack tree: levels=%d leaves=%s inodes=%s symbols=%d",
              levels, symbols_in.tolist(), inodes_in.tolist(), symbol_table_capacity)

    return TreeDescriptor(
        levels=levels,
        symbols_in=symbols_in,
        inodes_in=inodes_in,
        symbol_table=table,
        level_offsets=level_offsets,
        uncompressed_size=uncompressed_size,
    )
