"""
End-to-end tests of the packing pipeline with an in-memory rasterizer.
"""

import pytest

from glyphpack.builder import build_font, build_glyphs
from glyphpack.config import BuildOptions, SpaceWidthPolicy
from glyphpack.errors import FieldOverflowError, UsageError
from glyphpack.layout import GUTTER
from glyphpack.text.metadata import LayoutKind, NO_DATA, GlyphMetrics, unpack_atlas_xy

from conftest import FakeRasterizer


def _options(table, **kwargs):
    return BuildOptions("fonts/Fake.ttf", table=table, **kwargs)


# --------------------------------------------------------------------------- #
# Uniform 8x8 monochrome font, linear stream
# --------------------------------------------------------------------------- #
def test_uniform_ascii_linear(fake_rasterizer, ascii_table):
    font = build_font(fake_rasterizer, _options(ascii_table))

    # placeholder (5x8) + 94 ASCII glyphs, 8 rows of 1 byte each
    assert font.data_size == 95 * 8
    offsets = [g.location for g in font.glyphs if g.printable]
    assert offsets == list(range(0, 95 * 8, 8))
    assert font.glyph_count == 96


def test_linear_offsets_follow_data(ascii_table):
    r = FakeRasterizer(sizes={ord("W"): (11, 8), ord("i"): (2, 9), ord("g"): (6, 10)})
    font = build_font(r, _options(ascii_table))
    printable = [g for g in font.glyphs if g.printable]
    for a, b in zip(printable, printable[1:]):
        assert b.location == a.location + len(a.data)
    assert font.data_size == sum(len(g.data) for g in font.glyphs)


def test_8bpp_linear(fake_rasterizer, ascii_table):
    font = build_font(fake_rasterizer, _options(ascii_table, depth=8))
    # placeholder 5x8 + 94 glyphs of 8x8, one byte per pixel
    assert font.data_size == 5 * 8 + 94 * 64
    assert fake_rasterizer.calls[0][1] == 8


# --------------------------------------------------------------------------- #
# Same font, texture atlas
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize("depth", [1, 8])
def test_uniform_ascii_atlas(fake_rasterizer, ascii_table, depth):
    font = build_font(fake_rasterizer, _options(ascii_table, depth=depth, layout=LayoutKind.ATLAS))

    rects = []
    for g in font.glyphs:
        if g.printable:
            x, y = unpack_atlas_xy(g.location)
            rects.append((x, y, g.width, g.height))

    for i, (ax, ay, aw, ah) in enumerate(rects):
        assert 0 <= ax and ax + aw <= font.atlas_width
        assert 0 <= ay and ay + ah <= font.atlas_height
        for bx, by, bw, bh in rects[i + 1:]:
            disjoint = (ax + aw + GUTTER <= bx or bx + bw + GUTTER <= ax or
                        ay + ah + GUTTER <= by or by + bh + GUTTER <= ay)
            assert disjoint

    assert font.atlas_height <= font.packed.allocated_height
    row_bytes = (font.atlas_width + 7) // 8 if depth == 1 else font.atlas_width
    assert font.data_size == row_bytes * font.atlas_height


# --------------------------------------------------------------------------- #
# Metadata
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize("layout", [LayoutKind.LINEAR, LayoutKind.ATLAS])
def test_words_decode_to_glyph_geometry(layout):
    r = FakeRasterizer(tops={ord("g"): 5, ord("A"): 9, ord("_"): 0})
    options = BuildOptions("Fake.ttf", layout=layout, depth=8)
    font = build_font(r, options)
    max_top = max(g.y for g in font.glyphs)

    for i, g in enumerate(font.glyphs):
        m = font.metrics(i)
        assert m == GlyphMetrics(g.code, g.width, g.height, max_top - g.y, g.location)
        assert m.top >= 0

    assert font.line_height == max(font.metrics(i).top + g.height
                                   for i, g in enumerate(font.glyphs))


def test_space_is_advance_only(fake_rasterizer, ascii_table):
    font = build_font(fake_rasterizer, _options(ascii_table, point_size=24))
    space = font.glyphs[1]
    m = font.metrics(1)
    assert space.key.text == " "
    assert m.location == NO_DATA
    assert m.height == 0
    assert m.width == 24 // 10 + 1
    assert space.data == b""
    assert 0x20 not in [code for code, _ in fake_rasterizer.calls]


def test_fixed_space_width(fake_rasterizer, ascii_table):
    options = _options(ascii_table, space=SpaceWidthPolicy(fixed=4))
    font = build_font(fake_rasterizer, options)
    assert font.metrics(1).width == 4


def test_space_width_overflow(fake_rasterizer, ascii_table):
    options = _options(ascii_table, space=SpaceWidthPolicy(fixed=200))
    with pytest.raises(FieldOverflowError):
        build_font(fake_rasterizer, options)


def test_supplemental_code_points():
    font = build_font(FakeRasterizer(), BuildOptions("Fake.ttf"))
    codes = [font.metrics(i).code for i in range(font.glyph_count)]
    assert codes[0] == 0
    assert 0xB0 in codes and 0x3C9 in codes
    assert codes == sorted(codes)


# --------------------------------------------------------------------------- #
# Placeholder
# --------------------------------------------------------------------------- #
def test_placeholder_sized_from_l(ascii_table):
    r = FakeRasterizer(sizes={ord("l"): (2, 11)}, tops={ord("l"): 11})
    glyphs = build_glyphs(r, _options(ascii_table))
    p = glyphs[0]
    assert p.key.is_placeholder
    assert (p.width, p.height) == (7, 11)
    assert p.y == 11
    assert p.code == 0


def test_placeholder_without_l_in_table():
    from glyphpack.text.charset import GlyphKey, GlyphTable

    table = GlyphTable([GlyphKey(""), GlyphKey("A")])
    r = FakeRasterizer(sizes={ord("l"): (2, 9)})
    glyphs = build_glyphs(r, BuildOptions("Fake.ttf", table=table))
    assert glyphs[0].height == 9
    assert len(glyphs) == 2


def test_placeholder_when_font_lacks_l(ascii_table):
    r = FakeRasterizer(sizes={ord("l"): (0, 0)}, pixel_size=12)
    glyphs = build_glyphs(r, _options(ascii_table))
    assert (glyphs[0].width, glyphs[0].height) == (5, 8)


# --------------------------------------------------------------------------- #
# Rejected input
# --------------------------------------------------------------------------- #
def test_glyph_width_130_rejected(ascii_table):
    r = FakeRasterizer(sizes={ord("W"): (130, 8)})
    with pytest.raises(FieldOverflowError) as exc:
        build_font(r, _options(ascii_table))
    assert exc.value.field == "width"
    assert "W" in str(exc.value)


def test_missing_glyph_warns(ascii_table, capsys):
    r = FakeRasterizer(missing={ord("~")})
    build_font(r, _options(ascii_table))
    assert "Warning: font has no glyph for ~ (U+007E)" in capsys.readouterr().out


# --------------------------------------------------------------------------- #
# Options
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize("policy", [SpaceWidthPolicy(fixed=0), SpaceWidthPolicy(minimum=0)])
def test_zero_space_width_rejected(fake_rasterizer, ascii_table, policy):
    with pytest.raises(UsageError, match="at least 1"):
        build_font(fake_rasterizer, _options(ascii_table, space=policy))


def test_space_width_policy():
    assert SpaceWidthPolicy().width(8) == 1
    assert SpaceWidthPolicy().width(24) == 3
    assert SpaceWidthPolicy(minimum=0).width(20) == 2
    assert SpaceWidthPolicy(fixed=5).width(72) == 5


def test_negative_gap_width_rejected(ascii_table):
    with pytest.raises(UsageError):
        _options(ascii_table, gap_width=-1)
    assert _options(ascii_table, gap_width=0).gap_width == 0


def test_find_uses_table_order(fake_rasterizer, ascii_table):
    font = build_font(fake_rasterizer, _options(ascii_table))
    assert font.find("A") == ascii_table.index("A")
    assert font.glyphs[font.find("A")].key.text == "A"
    assert font.find("") == 0
    assert font.find("€") == 0
