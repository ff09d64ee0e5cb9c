import argparse
import logging
import sys

from bitpack import DEFAULT_CHUNK_SIZE
from codec_unpack import UnpackStats, unpack
from pack_errors import UnpackError


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Decompress a pack(1) file")
    ap.add_argument("input", help="path to packed input file")
    ap.add_argument("output", help="path to decompressed output file")
    ap.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE,
                    help="payload bytes read per step")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    stats = UnpackStats()
    try:
        with open(args.input, "rb") as fin, open(args.output, "wb") as fout:
            size = unpack(fin, fout, chunk_size=args.chunk_size, stats=stats)
    except (UnpackError, OSError) as exc:
        print(f"[unpack] {exc}", file=sys.stderr)
        print("[unpack] decompression of the file failed", file=sys.stderr)
        return 1

    if size <= 0:
        print("[unpack] decompression of the file failed: empty output", file=sys.stderr)
        return 1
    print(f"[unpack] wrote {args.output} size={size} ({size // 1024}KB) read={stats.bytes_in}B")
    return 0


if __name__ == "__main__":
    sys.exit(main())
