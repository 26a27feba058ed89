"""
Tests for the command line front end.
"""

import pytest

from glyphpack import cli
from glyphpack.config import parse_mode_tokens
from glyphpack.errors import UsageError
from glyphpack.text.metadata import LayoutKind

from conftest import FakeRasterizer


@pytest.fixture
def fake_font(tmp_path, monkeypatch):
    """A font path whose rasterizer is the in-memory fake."""
    opened = []

    def fake_open(path, point_size=8, dpi=96):
        r = FakeRasterizer()
        opened.append((path, point_size, dpi, r))
        return r

    monkeypatch.setattr(cli, "open_rasterizer", fake_open)
    path = tmp_path / "Fake.ttf"
    path.write_bytes(b"")
    return path, opened


def test_no_arguments(capsys):
    assert cli.main([]) == 1
    assert "usage:" in capsys.readouterr().err


def test_missing_font(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing.ttf")]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Font file not found")


def test_unknown_mode_word(fake_font, capsys):
    path, _ = fake_font
    assert cli.main([str(path), "bogus"]) == 1
    assert "unknown option 'bogus'" in capsys.readouterr().err


def test_bad_flag_exits_with_one(fake_font):
    path, _ = fake_font
    with pytest.raises(SystemExit) as exc:
        cli.main([str(path), "--dpi", "many"])
    assert exc.value.code == 1


@pytest.mark.parametrize("tokens, expected", [
    ([], (8, 1, LayoutKind.LINEAR)),
    (["12pt"], (12, 1, LayoutKind.LINEAR)),
    (["tex", "8bpp", "6pt"], (6, 8, LayoutKind.ATLAS)),
    (["8bpp", "1bpp"], (8, 1, LayoutKind.LINEAR)),
])
def test_parse_mode_tokens(tokens, expected):
    assert parse_mode_tokens(tokens) == expected


@pytest.mark.parametrize("token", ["0pt", "pt", "12px", "4bpp", "TEX"])
def test_parse_mode_tokens_rejects(token):
    with pytest.raises(UsageError):
        parse_mode_tokens([token])


def test_build_writes_beside_font(fake_font, capsys):
    path, opened = fake_font
    assert cli.main([str(path), "10pt", "--dpi", "72"]) == 0

    out_dir = path.parent
    assert (out_dir / "Fake10pt1bpp.hpp").is_file()
    assert (out_dir / "Fake10pt1bpp.cpp").is_file()
    assert opened[0][1:3] == (10, 72)
    assert opened[0][3].closed

    out = capsys.readouterr().out
    assert "Loading font:" in out
    assert "Created:" in out


def test_build_atlas_to_output_dir(fake_font, tmp_path):
    path, _ = fake_font
    out_dir = tmp_path / "generated"
    png = tmp_path / "atlas.png"
    args = [str(path), "tex", "8bpp", "-o", str(out_dir), "--png", str(png),
            "--prelude", "gfx.hpp", "--postlude", "end.hpp"]
    assert cli.main(args) == 0

    source = (out_dir / "Fake8pt8bpp.cpp").read_text(encoding="utf-8")
    assert source.startswith('#include "gfx.hpp"')
    assert "extern const TextureFont Fake8pt8bpp" in source
    assert png.read_bytes()[:4] == b"\x89PNG"


def test_dry_run_writes_nothing(fake_font, capsys):
    path, _ = fake_font
    assert cli.main([str(path), "--dry-run", "--preview", "A"]) == 0
    assert sorted(p.name for p in path.parent.iterdir()) == ["Fake.ttf"]
    out = capsys.readouterr().out
    assert "'A' (U+0041)" in out
    assert "Dry run, no files written" in out


def test_space_width_flag(fake_font):
    path, _ = fake_font
    assert cli.main([str(path), "--space-width", "3"]) == 0
    source = (path.parent / "Fake8pt1bpp.cpp").read_text(encoding="utf-8")
    # space keeps no data and a 3 pixel advance
    assert "{0x%08x, " % (0x20 | 3 << 18) in source


def test_space_width_overflow_is_reported(fake_font, capsys):
    path, _ = fake_font
    assert cli.main([str(path), "--space-width", "500"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_png_failure_leaves_no_artifacts(fake_font, tmp_path, capsys):
    path, _ = fake_font
    png = tmp_path / "no_such_dir" / "atlas.png"
    assert cli.main([str(path), "--png", str(png)]) == 1

    assert sorted(p.name for p in path.parent.iterdir()) == ["Fake.ttf"]
    assert not png.parent.exists()
    assert capsys.readouterr().err.startswith("Error: Unable to write")


def test_png_committed_with_sources(fake_font, tmp_path, capsys):
    path, _ = fake_font
    png = tmp_path / "strip.png"
    assert cli.main([str(path), "--png", str(png)]) == 0
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "Fake.ttf", "Fake8pt1bpp.cpp", "Fake8pt1bpp.hpp", "strip.png"]
    assert capsys.readouterr().out.count("Created:") == 3


def test_zero_space_width_rejected(fake_font, capsys):
    path, _ = fake_font
    assert cli.main([str(path), "--space-width", "0"]) == 1
    assert "space width must be at least 1" in capsys.readouterr().err
    assert sorted(p.name for p in path.parent.iterdir()) == ["Fake.ttf"]


def test_negative_gap_width_rejected(fake_font, capsys):
    path, _ = fake_font
    assert cli.main([str(path), "--gap-width", "-2"]) == 1
    assert "gap width must not be negative" in capsys.readouterr().err
    assert sorted(p.name for p in path.parent.iterdir()) == ["Fake.ttf"]
