import math

import pytest

from glyphatlas.geometry import Bounds, Padding, Range
from glyphatlas.glyph_geometry import GlyphAttributes, GlyphGeometry, GlyphIdentifierType
from glyphatlas.rectangle import Rectangle


def make_glyph(**kwargs):
    defaults = dict(index=7, codepoint=65, geometry_scale=1.0, bounds=Bounds(0.0, 0.0, 1.0, 2.0), advance=1.5)
    defaults.update(kwargs)
    return GlyphGeometry(**defaults)


class WideMiters:
    def __init__(self, extra):
        self.extra = extra
        self.calls = []

    def bound_miters(self, l, b, r, t, border, miter_limit, polarity):
        self.calls.append((border, miter_limit, polarity))
        return l - self.extra, b - self.extra, r + self.extra, t + self.extra


def test_identifier_selection():
    glyph = make_glyph()
    assert glyph.get_identifier(GlyphIdentifierType.GLYPH_INDEX) == 7
    assert glyph.get_identifier(GlyphIdentifierType.UNICODE_CODEPOINT) == 65


def test_whitespace_derived_from_bounds():
    assert make_glyph(bounds=Bounds()).is_whitespace is True
    assert make_glyph().is_whitespace is False
    assert make_glyph(whitespace=True).is_whitespace is True


def test_wrap_box_covers_range_and_plane_bounds_invariant():
    glyph = make_glyph()
    attrs = GlyphAttributes(scale=10.0, range=Range(-0.5, 0.5))
    glyph.wrap_box(attrs)
    w, h = glyph.box_size
    assert w >= 10.0 * (1.0 + 1.0)
    assert h >= 10.0 * (2.0 + 1.0)
    plane = glyph.quad_plane_bounds()
    assert plane.r - plane.l == pytest.approx((w - 1) / 10.0)
    assert plane.t - plane.b == pytest.approx((h - 1) / 10.0)
    # Expanded bounds are centred within the box.
    assert plane.l == pytest.approx(-0.5)
    assert plane.r == pytest.approx(1.5)
    assert glyph.box_range == Range(-0.5, 0.5)
    assert glyph.box_scale == 10.0


def test_wrap_box_pixel_aligned_origin_is_integral():
    glyph = make_glyph(bounds=Bounds(0.13, -0.27, 1.41, 1.9))
    glyph.wrap_box(GlyphAttributes(scale=7.0, range=Range(-0.25, 0.25), px_align_origin_x=True, px_align_origin_y=True))
    tx, ty = glyph.box_translate
    assert tx * 7.0 == pytest.approx(round(tx * 7.0))
    assert ty * 7.0 == pytest.approx(round(ty * 7.0))


def test_wrap_box_empty_bounds_gives_empty_box():
    glyph = make_glyph(bounds=Bounds())
    glyph.wrap_box(GlyphAttributes(scale=4.0))
    assert glyph.box_size == (0, 0)
    assert glyph.box_translate == (0.0, 0.0)
    assert glyph.quad_plane_bounds() == Bounds()
    assert glyph.quad_atlas_bounds() == Bounds()


def test_wrap_box_miter_limit_uses_shape():
    plain = make_glyph()
    mitered = make_glyph(shape=WideMiters(1.0))
    attrs = GlyphAttributes(scale=10.0, range=Range(-0.5, 0.5), miter_limit=2.0)
    plain.wrap_box(GlyphAttributes(scale=10.0, range=Range(-0.5, 0.5)))
    mitered.wrap_box(attrs)
    assert mitered.box_rect.w == plain.box_rect.w + 20
    assert mitered.shape.calls == [(0.5, 2.0, 1)]


def test_outer_padding_shrinks_quad():
    glyph = make_glyph()
    glyph.wrap_box(GlyphAttributes(scale=10.0, outer_padding=Padding.uniform(0.2)))
    glyph.place_box(3, 4)
    atlas = glyph.quad_atlas_bounds()
    w, h = glyph.box_size
    assert atlas.l == pytest.approx(3 + 2.0 + 0.5)
    assert atlas.r == pytest.approx(3 + w - 2.0 - 0.5)
    assert atlas.b == pytest.approx(4 + 2.0 + 0.5)
    assert atlas.t == pytest.approx(4 + h - 2.0 - 0.5)


def test_frame_box_centres_glyph():
    glyph = make_glyph()
    glyph.frame_box(GlyphAttributes(scale=10.0), 30, 40)
    assert glyph.box_size == (30, 40)
    tx, ty = glyph.box_translate
    left_margin = 10.0 * (0.0 + tx)
    right_margin = 30 - 10.0 * (1.0 + tx)
    assert left_margin == pytest.approx(right_margin)
    bottom_margin = 10.0 * (0.0 + ty)
    top_margin = 40 - 10.0 * (2.0 + ty)
    assert bottom_margin == pytest.approx(top_margin)


def test_frame_box_fixed_origin():
    glyph = make_glyph(geometry_scale=0.5)
    glyph.frame_box(GlyphAttributes(scale=10.0), 30, 40, 3.0, 1.0)
    assert glyph.box_translate == (6.0, 2.0)


def test_frame_box_fixed_one_axis():
    glyph = make_glyph()
    glyph.frame_box(GlyphAttributes(scale=10.0), 30, 40, fixed_y=1.25)
    tx, ty = glyph.box_translate
    assert ty == 1.25
    assert 10.0 * tx == pytest.approx(30 - 10.0 * (1.0 + tx))


def test_frame_box_pixel_aligned_origin_is_integral():
    glyph = make_glyph(bounds=Bounds(0.13, -0.27, 1.41, 1.9))
    glyph.frame_box(GlyphAttributes(scale=7.0, px_align_origin_x=True, px_align_origin_y=True), 25, 31)
    tx, ty = glyph.box_translate
    assert tx * 7.0 == pytest.approx(round(tx * 7.0))
    assert ty * 7.0 == pytest.approx(round(ty * 7.0))


def test_place_and_set_box_rect():
    glyph = make_glyph()
    rect = Rectangle(1, 2, 3, 4)
    glyph.set_box_rect(rect)
    rect.x = 99
    assert glyph.box_rect == Rectangle(1, 2, 3, 4)
    glyph.place_box(5, 6)
    assert glyph.box_rect == Rectangle(5, 6, 3, 4)
    assert glyph.box_size == (3, 4)


def test_geometry_scale_applies_to_plane_bounds():
    glyph = make_glyph(geometry_scale=0.25, bounds=Bounds(0.0, 0.0, 4.0, 8.0))
    glyph.wrap_box(GlyphAttributes(scale=10.0))
    plane = glyph.quad_plane_bounds()
    w, _ = glyph.box_size
    assert math.isclose(plane.r - plane.l, 0.25 * (w - 1) / glyph.box_scale)
    assert plane.l == pytest.approx(0.0)
    assert plane.r == pytest.approx(1.0)