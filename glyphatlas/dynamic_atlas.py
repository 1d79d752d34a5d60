"""An atlas that grows as glyphs are added over time."""

from __future__ import annotations

from enum import IntFlag
from typing import Any, Callable, Generic, Protocol, Sequence, TypeVar

from .glyph_geometry import GlyphGeometry
from .rectangle import Point, Rectangle, Remap
from .rectangle_packer import RectanglePacker
from .utils import ceil_to_pot


class ChangeFlag(IntFlag):
    """How the atlas changed while glyphs were added."""

    NO_CHANGE = 0
    RESIZED = 1
    REARRANGED = 2


class AtlasGenerator(Protocol):
    """The work a dynamic atlas delegates to its generator."""

    def generate(self, glyphs: Sequence[GlyphGeometry]) -> None:
        ...

    def resize(self, width: int, height: int) -> None:
        ...

    def rearrange(self, width: int, height: int, remapping: Sequence[Remap]) -> None:
        ...


G = TypeVar("G", bound=AtlasGenerator)


class DynamicAtlas(Generic[G]):
    """Lays out and enlarges a square atlas as glyphs are added.

    The generator passed in must not contain any glyphs yet; do not add
    glyphs to it directly.
    """

    def __init__(self, generator: G) -> None:
        self.side = 0
        self._glyph_count = 0
        self._total_area = 0
        self._packer = RectanglePacker()
        self._rectangles: list[Rectangle] = []
        self._remaps: list[Remap] = []
        self.generator = generator

    @classmethod
    def with_size(
        cls, factory: Callable[..., G], min_side: int, *args: Any, **kwargs: Any
    ) -> "DynamicAtlas[G]":
        """Create the atlas and its generator with a side of at least min_side."""
        side = ceil_to_pot(min_side) if min_side > 0 else 0
        atlas = cls(factory(side, side, *args, **kwargs))
        atlas.side = side
        atlas._packer = RectanglePacker(side, side)
        return atlas

    def add(self, glyphs: Sequence[GlyphGeometry], allow_rearrange: bool = False) -> ChangeFlag:
        """Place a batch of glyphs, growing the atlas as needed.

        Adding several glyphs at once may pack them more efficiently.
        """
        flags = ChangeFlag.NO_CHANGE
        start = len(self._rectangles)
        for offset, glyph in enumerate(glyphs):
            if glyph.is_whitespace:
                continue
            w, h = glyph.box_size
            self._rectangles.append(Rectangle(0, 0, w, h))
            self._remaps.append(Remap(index=self._glyph_count + offset, width=w, height=h))
            self._total_area += w * h

        if len(self._rectangles) > start:
            packer_start = start
            while (remaining := self._packer.pack(self._rectangles[packer_start:])) > 0:
                self.side = (self.side or 1) << 1
                while self.side * self.side < self._total_area:
                    self.side <<= 1
                if allow_rearrange:
                    self._packer = RectanglePacker(self.side, self.side)
                    packer_start = 0
                else:
                    self._packer.expand(self.side, self.side)
                    packer_start = len(self._rectangles) - remaining
                flags |= ChangeFlag.RESIZED

            if packer_start < start:
                for remap, rect in zip(self._remaps[packer_start:start], self._rectangles[packer_start:start]):
                    remap.source = remap.target
                    remap.target = Point(rect.x, rect.y)
                self.generator.rearrange(self.side, self.side, self._remaps[:start])
                flags |= ChangeFlag.REARRANGED
            elif flags & ChangeFlag.RESIZED:
                self.generator.resize(self.side, self.side)

            for remap, rect in zip(self._remaps[start:], self._rectangles[start:]):
                remap.target = Point(rect.x, rect.y)
                glyphs[remap.index - self._glyph_count].place_box(rect.x, rect.y)

        self.generator.generate(glyphs)
        self._glyph_count += len(glyphs)
        return flags