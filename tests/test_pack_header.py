import io

import pytest

from pack_errors import InvalidTreeDepth, SymbolTableOverflow, TruncatedSymbolTable
from pack_header import read_level_counts, read_levels, read_symbol_table
from packer import write_header


@pytest.mark.parametrize("levels", [1, 2, 24])
def test_read_levels_accepts_valid_depth(levels):
    assert read_levels(io.BytesIO(bytes([levels]))) == levels


@pytest.mark.parametrize("levels", [0, 25, 0x1F, 255])
def test_read_levels_rejects_insane_depth_before_reading_more(levels):
    f = io.BytesIO(bytes([levels, 1, 1, 65, 66]))
    with pytest.raises(InvalidTreeDepth):
        read_levels(f)
    assert f.tell() == 1


def test_read_levels_uses_pre_read_byte():
    f = io.BytesIO(b"\x01rest")
    assert read_levels(f, pre=b"\x03") == 3
    assert f.tell() == 0


def test_read_levels_rejects_long_prefix():
    with pytest.raises(ValueError):
        read_levels(io.BytesIO(b""), pre=b"\x01\x01")


def test_read_levels_empty_stream():
    with pytest.raises(TruncatedSymbolTable):
        read_levels(io.BytesIO(b""))


def test_level_counts_overflow_before_symbol_table():
    # 1 + 200 + 56 = 257 symbols
    f = io.BytesIO(bytes([200, 56]) + b"x" * 300)
    with pytest.raises(SymbolTableOverflow):
        read_level_counts(f, 2)
    assert f.tell() == 2


def test_level_counts_at_capacity():
    assert read_level_counts(io.BytesIO(bytes([200, 55])), 2) == [200, 55]


def test_level_counts_truncated():
    with pytest.raises(TruncatedSymbolTable):
        read_level_counts(io.BytesIO(b"\x01"), 3)


def test_symbol_table_truncated():
    with pytest.raises(TruncatedSymbolTable):
        read_symbol_table(io.BytesIO(b"ab"), 3)


def test_write_header_layout():
    f = io.BytesIO()
    write_header(f, [1, 0], b"AB")
    assert f.getvalue() == b"\x02\x01\x00AB"


def test_write_header_checks_symbol_count():
    with pytest.raises(ValueError):
        write_header(io.BytesIO(), [1, 0], b"A")
