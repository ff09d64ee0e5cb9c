from typing import BinaryIO, Iterator

import numpy as np

from pack_errors import IoFailure

DEFAULT_CHUNK_SIZE = 8192


class BitReader:
    """
    Streams the rest of a binary file as MSB-first bits, one chunk of
    bytes at a time. Each chunk comes back as a flat uint8 0/1 array of
    8 * len(chunk) bits.
    """
    def __init__(self, f: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.f = f
        self.chunk_size = chunk_size
        self.bytes_read = 0

    def _read_chunk(self) -> bytes:
        try:
            data = self.f.read(self.chunk_size)
        except OSError as exc:
            raise IoFailure(f"Error reading packed payload: {exc}") from exc
        return data or b""

    def chunks(self) -> Iterator[np.ndarray]:
        while True:
            data = self._read_chunk()
            if not data:
                return
            self.bytes_read += len(data)
            yield np.unpackbits(np.frombuffer(data, dtype=np.uint8))
