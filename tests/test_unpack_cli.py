import pytest

from packer import pack_bytes
from unpack import main


def test_cli_decodes_file(tmp_path, capsys):
    data = b"pack(1) was the compressor before compress(1)\n" * 30
    src = tmp_path / "in.z"
    dst = tmp_path / "out.txt"
    src.write_bytes(pack_bytes(data))

    assert main([str(src), str(dst)]) == 0
    assert dst.read_bytes() == data
    assert f"size={len(data)}" in capsys.readouterr().out


def test_cli_reports_corrupt_file(tmp_path, capsys):
    src = tmp_path / "bad.z"
    src.write_bytes(b"\x1f\x00")

    assert main([str(src), str(tmp_path / "out")]) == 1
    assert "insane levels" in capsys.readouterr().err


def test_cli_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "nope.z"), str(tmp_path / "out")]) == 1
    assert "failed" in capsys.readouterr().err


def test_cli_usage_without_arguments(capsys):
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2
    assert "usage" in capsys.readouterr().err
