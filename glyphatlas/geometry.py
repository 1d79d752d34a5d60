"""Distance ranges, shape bounds and box padding."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Range:
    """An interval of signed distances."""

    lower: float = 0.0
    upper: float = 0.0

    @classmethod
    def symmetric(cls, width: float) -> "Range":
        """Return a range of the given width centred on zero."""
        return cls(-0.5 * width, 0.5 * width)

    def __add__(self, other: "Range") -> "Range":
        if not isinstance(other, Range):
            return NotImplemented
        return Range(self.lower + other.lower, self.upper + other.upper)

    def __mul__(self, factor: float) -> "Range":
        if isinstance(factor, Range):
            return NotImplemented
        return Range(self.lower * factor, self.upper * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Range":
        if isinstance(divisor, Range):
            return NotImplemented
        return Range(self.lower / divisor, self.upper / divisor)


@dataclass(frozen=True)
class Bounds:
    """An axis-aligned box given by its left, bottom, right and top edges."""

    l: float = 0.0
    b: float = 0.0
    r: float = 0.0
    t: float = 0.0


@dataclass(frozen=True)
class Padding:
    """Padding widths for the left, bottom, right and top sides."""

    l: float = 0.0
    b: float = 0.0
    r: float = 0.0
    t: float = 0.0

    @classmethod
    def uniform(cls, width: float) -> "Padding":
        """Return the same padding on all four sides."""
        return cls(width, width, width, width)

    def __neg__(self) -> "Padding":
        return Padding(-self.l, -self.b, -self.r, -self.t)

    def __add__(self, other: "Padding") -> "Padding":
        if not isinstance(other, Padding):
            return NotImplemented
        return Padding(self.l + other.l, self.b + other.b, self.r + other.r, self.t + other.t)

    def __sub__(self, other: "Padding") -> "Padding":
        if not isinstance(other, Padding):
            return NotImplemented
        return Padding(self.l - other.l, self.b - other.b, self.r - other.r, self.t - other.t)

    def __mul__(self, factor: float) -> "Padding":
        if isinstance(factor, Padding):
            return NotImplemented
        return Padding(self.l * factor, self.b * factor, self.r * factor, self.t * factor)

    def __rmul__(self, factor: float) -> "Padding":
        if isinstance(factor, Padding):
            return NotImplemented
        return Padding(factor * self.l, factor * self.b, factor * self.r, factor * self.t)

    def __truediv__(self, divisor: float) -> "Padding":
        if isinstance(divisor, Padding):
            return NotImplemented
        return Padding(self.l / divisor, self.b / divisor, self.r / divisor, self.t / divisor)


def pad(bounds: Bounds, padding: Padding) -> Bounds:
    """Return the bounds grown outwards by the padding on each side."""
    return Bounds(
        bounds.l - padding.l,
        bounds.b - padding.b,
        bounds.r + padding.r,
        bounds.t + padding.t,
    )