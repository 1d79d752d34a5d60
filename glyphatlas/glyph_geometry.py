"""Geometry and atlas box layout of a single glyph."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from .geometry import Bounds, Padding, Range
from .rectangle import Rectangle


class GlyphIdentifierType(Enum):
    """The kind of identifier by which glyphs are referred to."""

    GLYPH_INDEX = "index"
    UNICODE_CODEPOINT = "unicode"


class MiterBounder(Protocol):
    """A shape that can widen bounds to include its miters."""

    def bound_miters(
        self,
        l: float,
        b: float,
        r: float,
        t: float,
        border: float,
        miter_limit: float,
        polarity: int,
    ) -> tuple[float, float, float, float]:
        ...


@dataclass(frozen=True)
class GlyphAttributes:
    """Scale, distance range, padding and alignment used to lay out a glyph's box."""

    scale: float = 1.0
    range: Range = field(default_factory=Range)
    inner_padding: Padding = field(default_factory=Padding)
    outer_padding: Padding = field(default_factory=Padding)
    miter_limit: float = 0.0
    px_align_origin_x: bool = False
    px_align_origin_y: bool = False


def _half_toward_zero(value: int) -> int:
    return int(value / 2)


class GlyphGeometry:
    """The shape bounds, advance and atlas box of a single glyph.

    ``bounds`` are the glyph's raw shape bounds in font units. A glyph is
    whitespace when it has no geometry; unless stated explicitly, that is
    taken to be the case when its bounds are empty. An optional ``shape``
    providing ``bound_miters`` is consulted when a miter limit is set.
    """

    def __init__(
        self,
        index: int = 0,
        codepoint: int = 0,
        geometry_scale: float = 1.0,
        bounds: Bounds = Bounds(),
        advance: float = 0.0,
        *,
        whitespace: Optional[bool] = None,
        shape: Optional[MiterBounder] = None,
    ) -> None:
        self.index = index
        self.codepoint = codepoint
        self.geometry_scale = geometry_scale
        self.bounds = bounds
        self.advance = advance
        self.shape = shape
        if whitespace is None:
            whitespace = not (bounds.l < bounds.r and bounds.b < bounds.t)
        self._whitespace = whitespace
        self.box_rect = Rectangle()
        self.box_range = Range()
        self.box_scale = 0.0
        self.box_translate: tuple[float, float] = (0.0, 0.0)
        self.box_outer_padding = Padding()

    def __repr__(self) -> str:
        return (
            f"GlyphGeometry(index={self.index}, codepoint={self.codepoint}, "
            f"box_rect={self.box_rect})"
        )

    @property
    def is_whitespace(self) -> bool:
        """True if the glyph has no geometry."""
        return self._whitespace

    @property
    def box_size(self) -> tuple[int, int]:
        """The width and height of the glyph's box in the atlas."""
        return self.box_rect.w, self.box_rect.h

    def _expanded_bounds(
        self, attributes: GlyphAttributes, range_: Range, full_padding: Padding
    ) -> tuple[float, float, float, float]:
        l, b, r, t = self.bounds.l, self.bounds.b, self.bounds.r, self.bounds.t
        l += range_.lower
        b += range_.lower
        r -= range_.lower
        t -= range_.lower
        if attributes.miter_limit > 0 and self.shape is not None:
            l, b, r, t = self.shape.bound_miters(
                l, b, r, t, -range_.lower, attributes.miter_limit, 1
            )
        l -= full_padding.l
        b -= full_padding.b
        r += full_padding.r
        t += full_padding.t
        return l, b, r, t

    def _prepare(self, attributes: GlyphAttributes) -> tuple[float, Range, Padding]:
        scale = attributes.scale * self.geometry_scale
        range_ = attributes.range / self.geometry_scale
        full_padding = (attributes.inner_padding + attributes.outer_padding) / self.geometry_scale
        self.box_range = range_
        self.box_scale = scale
        return scale, range_, full_padding

    def wrap_box(self, attributes: GlyphAttributes) -> None:
        """Compute the box dimensions and the transformation that fit the glyph."""
        scale, range_, full_padding = self._prepare(attributes)
        if not (self.bounds.l < self.bounds.r and self.bounds.b < self.bounds.t):
            self.box_rect.w = 0
            self.box_rect.h = 0
            self.box_translate = (0.0, 0.0)
            return
        l, b, r, t = self._expanded_bounds(attributes, range_, full_padding)
        if attributes.px_align_origin_x:
            sl = math.floor(scale * l - 0.5)
            sr = math.ceil(scale * r + 0.5)
            self.box_rect.w = sr - sl
            tx = -sl / scale
        else:
            w = scale * (r - l)
            self.box_rect.w = math.ceil(w) + 1
            tx = -l + 0.5 * (self.box_rect.w - w) / scale
        if attributes.px_align_origin_y:
            sb = math.floor(scale * b - 0.5)
            st = math.ceil(scale * t + 0.5)
            self.box_rect.h = st - sb
            ty = -sb / scale
        else:
            h = scale * (t - b)
            self.box_rect.h = math.ceil(h) + 1
            ty = -b + 0.5 * (self.box_rect.h - h) / scale
        self.box_translate = (tx, ty)
        self.box_outer_padding = attributes.outer_padding * attributes.scale

    def frame_box(
        self,
        attributes: GlyphAttributes,
        width: int,
        height: int,
        fixed_x: Optional[float] = None,
        fixed_y: Optional[float] = None,
    ) -> None:
        """Set the box to the given dimensions and align the glyph within it.

        A fixed origin coordinate, given in scaled units, replaces the
        computed alignment in that dimension.
        """
        scale, range_, full_padding = self._prepare(attributes)
        self.box_rect.w = width
        self.box_rect.h = height
        if fixed_x is not None and fixed_y is not None:
            self.box_translate = (fixed_x / self.geometry_scale, fixed_y / self.geometry_scale)
        else:
            l, b, r, t = self._expanded_bounds(attributes, range_, full_padding)
            if fixed_x is not None:
                tx = fixed_x / self.geometry_scale
            elif attributes.px_align_origin_x:
                sl = math.floor(scale * l - 0.5)
                sr = math.ceil(scale * r + 0.5)
                tx = (-sl + _half_toward_zero(width - (sr - sl))) / scale
            else:
                w = scale * (r - l)
                tx = -l + 0.5 * (width - w) / scale
            if fixed_y is not None:
                ty = fixed_y / self.geometry_scale
            elif attributes.px_align_origin_y:
                sb = math.floor(scale * b - 0.5)
                st = math.ceil(scale * t + 0.5)
                ty = (-sb + _half_toward_zero(height - (st - sb))) / scale
            else:
                h = scale * (t - b)
                ty = -b + 0.5 * (height - h) / scale
            self.box_translate = (tx, ty)
        self.box_outer_padding = attributes.outer_padding * attributes.scale

    def place_box(self, x: int, y: int) -> None:
        """Set the position of the glyph's box in the atlas."""
        self.box_rect.x = x
        self.box_rect.y = y

    def set_box_rect(self, rect: Rectangle) -> None:
        """Set the glyph's box rectangle in the atlas."""
        self.box_rect = Rectangle(rect.x, rect.y, rect.w, rect.h)

    def get_identifier(self, identifier_type: GlyphIdentifierType) -> int:
        """Return the glyph index or codepoint, as selected."""
        if identifier_type is GlyphIdentifierType.GLYPH_INDEX:
            return self.index
        if identifier_type is GlyphIdentifierType.UNICODE_CODEPOINT:
            return self.codepoint
        return 0

    def quad_plane_bounds(self) -> Bounds:
        """Return the glyph's quad as it is placed relative to the baseline origin."""
        rect = self.box_rect
        if not (rect.w > 0 and rect.h > 0):
            return Bounds()
        inv = 1 / self.box_scale
        tx, ty = self.box_translate
        pad_ = self.box_outer_padding
        gs = self.geometry_scale
        return Bounds(
            gs * (-tx + (pad_.l + 0.5) * inv),
            gs * (-ty + (pad_.b + 0.5) * inv),
            gs * (-tx + (-pad_.r + rect.w - 0.5) * inv),
            gs * (-ty + (-pad_.t + rect.h - 0.5) * inv),
        )

    def quad_atlas_bounds(self) -> Bounds:
        """Return the glyph's quad in atlas pixel coordinates."""
        rect = self.box_rect
        if not (rect.w > 0 and rect.h > 0):
            return Bounds()
        pad_ = self.box_outer_padding
        return Bounds(
            rect.x + pad_.l + 0.5,
            rect.y + pad_.b + 0.5,
            rect.x - pad_.r + rect.w - 0.5,
            rect.y - pad_.t + rect.h - 0.5,
        )