"""Tests for the chunk listing command."""

from PngViewer.chunk_dump import main
from png_factory import make_chunk, make_png


def test_lists_every_chunk(tmp_path, capsys):
    path = tmp_path / "a.png"
    path.write_bytes(make_png(1, 1, 8, 0, [b"\x00"], before_idat=[make_chunk("tEXt", b"a\x00b")]))
    assert main([str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split()[1] for line in lines] == ["IHDR", "tEXt", "IDAT", "IEND"]
    assert lines[0].split()[0] == "8"
    assert "critical" in lines[0]
    assert "ancillary" in lines[1]
    assert "ImageData(" in lines[2]


def test_reports_errors(tmp_path, capsys):
    path = tmp_path / "a.png"
    path.write_bytes(make_png(1, 1, 8, 0, [b"\x00"], tail=b"xx"))
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert "after IEND" in captured.err
    # chunks before the failure are still listed
    assert "IEND" in captured.out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.png")]) == 1
    assert "nope.png" in capsys.readouterr().err
