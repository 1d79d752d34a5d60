"""Integer rectangles and atlas remapping records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Point:
    """An integer position."""

    x: int = 0
    y: int = 0


@dataclass
class Rectangle:
    """An integer rectangle given by its corner and dimensions."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


@dataclass
class OrientedRectangle(Rectangle):
    """A rectangle that may have been placed rotated by 90 degrees."""

    rotated: bool = False


@dataclass
class Remap:
    """The repositioning of one subsection of an atlas."""

    index: int = 0
    source: Point = field(default_factory=Point)
    target: Point = field(default_factory=Point)
    width: int = 0
    height: int = 0