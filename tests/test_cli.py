from pathlib import Path

from PIL import Image

from gb2bpp.cli import main


def _write_png(path: Path, size=(8, 8), value=0) -> Path:
    Image.new("L", size, value).save(path)
    return path


def test_converts_single_file(tmp_path, capsys):
    src = _write_png(tmp_path / "bird.png", (16, 8), 0)
    out_dir = tmp_path / "out"

    assert main([str(src), "-o", str(out_dir)]) == 0

    target = out_dir / "bird.2bpp"
    assert target.read_bytes() == b"\xFF" * 32
    assert f"wrote {target} (2 tiles)" in capsys.readouterr().out


def test_reports_tile_count(tmp_path, capsys):
    src = _write_png(tmp_path / "font.png", (16, 16), 255)

    assert main([str(src), "-o", str(tmp_path / "out")]) == 0
    assert "(4 tiles)" in capsys.readouterr().out


def test_converts_directory_with_prefix_and_suffix(tmp_path):
    src_dir = tmp_path / "gfx"
    src_dir.mkdir()
    _write_png(src_dir / "a.png", value=255)
    _write_png(src_dir / "b.png", value=100)
    (src_dir / "notes.txt").write_text("ignored")
    out_dir = tmp_path / "out"

    assert main([str(src_dir), "-o", str(out_dir), "--prefix", "gfx_", "--suffix", "_tiles"]) == 0

    assert (out_dir / "gfx_a_tiles.2bpp").read_bytes() == b"\x00" * 16
    assert (out_dir / "gfx_b_tiles.2bpp").read_bytes() == b"\x00\xFF" * 8
    assert sorted(p.name for p in out_dir.iterdir()) == ["gfx_a_tiles.2bpp", "gfx_b_tiles.2bpp"]


def test_existing_output_requires_force(tmp_path, capsys):
    src = _write_png(tmp_path / "cavern.png")
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    target = out_dir / "cavern.2bpp"
    target.write_bytes(b"old")

    assert main([str(src), "-o", str(out_dir)]) == 1
    assert target.read_bytes() == b"old"
    assert "already exist" in capsys.readouterr().err

    assert main([str(src), "-o", str(out_dir), "--force"]) == 0
    assert target.read_bytes() == b"\xFF" * 16


def test_invalid_dimensions_fail_without_output(tmp_path, capsys):
    src = _write_png(tmp_path / "odd.png", (12, 8))
    out_dir = tmp_path / "out"

    assert main([str(src), "-o", str(out_dir)]) == 1
    assert "multiple of 8" in capsys.readouterr().err
    assert not (out_dir / "odd.2bpp").exists()


def test_rejects_non_png_input(tmp_path, capsys):
    src = tmp_path / "image.bmp"
    src.write_bytes(b"")

    assert main([str(src), "-o", str(tmp_path / "out")]) == 1
    assert "expected .png" in capsys.readouterr().err


def test_rejects_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "nope.png"), "-o", str(tmp_path / "out")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_rejects_empty_directory(tmp_path, capsys):
    empty = tmp_path / "empty"
    empty.mkdir()

    assert main([str(empty), "-o", str(tmp_path / "out")]) == 1
    assert "No PNG files" in capsys.readouterr().err


def test_rejects_duplicate_output_names(tmp_path, capsys):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    _write_png(first / "red.png")
    _write_png(second / "red.png")

    assert main([str(first), str(second), "-o", str(tmp_path / "out")]) == 1
    assert "Duplicate output name" in capsys.readouterr().err


def test_quiet_suppresses_progress(tmp_path, capsys):
    src = _write_png(tmp_path / "boulder.png")

    assert main([str(src), "-o", str(tmp_path / "out"), "--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_failed_input_leaves_no_partial_output(tmp_path, capsys):
    src_dir = tmp_path / "gfx"
    src_dir.mkdir()
    _write_png(src_dir / "a.png")
    _write_png(src_dir / "b.png", (12, 8))
    out_dir = tmp_path / "out"

    assert main([str(src_dir), "-o", str(out_dir)]) == 1
    assert "multiple of 8" in capsys.readouterr().err
    assert not (out_dir / "a.2bpp").exists()
    assert not (out_dir / "b.2bpp").exists()
