import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

from bitpack import BitReader, DEFAULT_CHUNK_SIZE
from huff_levels import TreeDescriptor, build_tree
from pack_errors import CorruptCode, IoFailure, PrematureEndOfStream

log = logging.getLogger(__name__)


@dataclass
class UnpackStats:
    bytes_in: int = 0
    bytes_out: int = 0


def _write(fout: BinaryIO, data: bytearray):
    if not data:
        return
    try:
        fout.write(bytes(data))
    except OSError as exc:
        raise IoFailure(f"Error writing unpacked data: {exc}") from exc


def decode_payload(tree: TreeDescriptor, fin: BinaryIO, fout: BinaryIO, *,
                   chunk_size: int = DEFAULT_CHUNK_SIZE,
                   stats: Optional[UnpackStats] = None) -> int:
    """
    Walk the level tables bit by bit until the EOB leaf.
    Returns the number of bytes written to 'fout'.
    """
    # plain lists: indexing numpy scalars per bit is slow
    inodes = tree.inodes_in.tolist()
    leaves = tree.symbols_in.tolist()
    offsets = tree.level_offsets.tolist()
    table = tree.symbol_table.tobytes()
    eob = tree.eob_index
    max_level = tree.max_level

    reader = BitReader(fin, chunk_size)
    level = 0
    code = 0
    bytes_out = 0
    consumed = 0
    finished = False

    for bits in reader.chunks():
        out = bytearray()
        for i, bit in enumerate(bits.tolist()):
            code = (code << 1) | bit
            if code >= inodes[level]:
                index = code - inodes[level]
                if index >= leaves[level]:
                    raise CorruptCode(f"File corrupt: leaf {index} out of range at level {level}")
                pos = offsets[level] + index
                if pos == eob:
                    consumed = reader.bytes_read - len(bits) // 8 + i // 8 + 1
                    finished = True
                    break
                out.append(table[pos])
                level = 0
                code = 0
            else:
                level += 1
                # guard only: inodes_in[max_level] is 0, so the last level always resolves
                if level > max_level:
                    raise CorruptCode("File corrupt: code deeper than the tree")
        bytes_out += len(out)
        _write(fout, out)
        if finished:
            break

    if stats is not None:
        stats.bytes_in += consumed if finished else reader.bytes_read
        stats.bytes_out += bytes_out

    if not finished:
        raise PrematureEndOfStream(f"Premature EOF: no EOB after {bytes_out} bytes")
    if tree.uncompressed_size is not None and bytes_out != tree.uncompressed_size:
        raise PrematureEndOfStream(
            f"Premature EOF: decoded {bytes_out} bytes, expected {tree.uncompressed_size}")
    tree.uncompressed_size = bytes_out
    log.debug("pack payload: %d bytes in, %d bytes out", reader.bytes_read, bytes_out)
    return bytes_out


def unpack(fin: BinaryIO, fout: BinaryIO, *, pre: bytes = b"",
           uncompressed_size: Optional[int] = None,
           chunk_size: int = DEFAULT_CHUNK_SIZE,
           stats: Optional[UnpackStats] = None) -> int:
    """
    Decode one pack(1) stream from 'fin' into 'fout'.
    Streams stay open; the caller owns them.
    """
    tree = build_tree(fin, pre=pre, uncompressed_size=uncompressed_size)
    if stats is not None:
        stats.bytes_in += 1 + tree.levels + tree.symbol_table.size
    return decode_payload(tree, fin, fout, chunk_size=chunk_size, stats=stats)
