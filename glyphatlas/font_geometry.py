"""Glyph geometry, metrics and kerning of one font or font variant."""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .glyph_geometry import GlyphGeometry, GlyphIdentifierType

DEFAULT_FONT_UNITS_PER_EM = 2048.0


@dataclass(frozen=True)
class FontMetrics:
    """Global vertical metrics of a font."""

    em_size: float = 0.0
    ascender_y: float = 0.0
    descender_y: float = 0.0
    line_height: float = 0.0
    underline_y: float = 0.0
    underline_thickness: float = 0.0


class FontGeometry:
    """The glyphs of a font together with its metrics and kerning.

    Several fonts may share one glyph storage list, so that all their glyphs
    can be packed into a single atlas. A font owns the consecutive run of the
    storage that it appended; glyphs can only be added while that run is
    still at the end of the storage.
    """

    def __init__(self, glyph_storage: Optional[list[GlyphGeometry]] = None) -> None:
        self._storage: list[GlyphGeometry] = [] if glyph_storage is None else glyph_storage
        self._range_start = len(self._storage)
        self._range_end = len(self._storage)
        self.geometry_scale = 1.0
        self.metrics = FontMetrics()
        self.preferred_identifier_type = GlyphIdentifierType.UNICODE_CODEPOINT
        self._by_index: dict[int, int] = {}
        self._by_codepoint: dict[int, int] = {}
        self._kerning: dict[tuple[int, int], float] = {}
        self._name: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        """The name associated with the font, or None if not set."""
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = value or None

    @property
    def glyphs(self) -> list[GlyphGeometry]:
        """The glyphs of this font, in the order they were added."""
        return self._storage[self._range_start:self._range_end]

    @property
    def kerning(self) -> Mapping[tuple[int, int], float]:
        """Kerning adjustments keyed by pairs of glyph indices, in scaled units."""
        return MappingProxyType(self._kerning)

    def load_metrics(self, metrics: FontMetrics, font_scale: float) -> None:
        """Set the metrics from raw font units and derive the geometry scale.

        A non-positive em size is taken to be 2048 font units. All stored
        metrics are multiplied by the resulting geometry scale.
        """
        em_size = metrics.em_size if metrics.em_size > 0 else DEFAULT_FONT_UNITS_PER_EM
        scale = font_scale / em_size
        self.geometry_scale = scale
        self.metrics = replace(
            metrics,
            em_size=em_size * scale,
            ascender_y=metrics.ascender_y * scale,
            descender_y=metrics.descender_y * scale,
            line_height=metrics.line_height * scale,
            underline_y=metrics.underline_y * scale,
            underline_thickness=metrics.underline_thickness * scale,
        )

    def add_glyph(self, glyph: GlyphGeometry) -> None:
        """Append a loaded glyph.

        Raises ValueError if another font has appended to the shared storage
        since this font's glyphs were added. The first glyph added for a given
        index or codepoint is the one found by lookups.
        """
        if len(self._storage) != self._range_end:
            raise ValueError("glyph storage has been extended by another font")
        position = self._range_end
        self._by_index.setdefault(glyph.index, position)
        if glyph.codepoint:
            self._by_codepoint.setdefault(glyph.codepoint, position)
        self._storage.append(glyph)
        self._range_end += 1

    def add_glyphs(self, glyphs: Iterable[GlyphGeometry]) -> int:
        """Append several glyphs; return how many were added."""
        count = 0
        for glyph in glyphs:
            self.add_glyph(glyph)
            count += 1
        return count

    def add_kerning(self, index1: int, index2: int, advance: float) -> None:
        """Record a kerning adjustment between two glyph indices, given in font units.

        The adjustment is stored multiplied by the geometry scale; a zero
        adjustment is not recorded.
        """
        if advance:
            self._kerning[(index1, index2)] = self.geometry_scale * advance

    def glyph_by_index(self, index: int) -> Optional[GlyphGeometry]:
        """Return the glyph with the given glyph index, or None."""
        position = self._by_index.get(index)
        return None if position is None else self._storage[position]

    def glyph_by_codepoint(self, codepoint: int) -> Optional[GlyphGeometry]:
        """Return the glyph for the given Unicode codepoint, or None."""
        position = self._by_codepoint.get(codepoint)
        return None if position is None else self._storage[position]

    def advance_by_index(self, index1: int, index2: int) -> float:
        """Return the advance from the first glyph to the second, kerning included.

        Raises KeyError if the first glyph is not present.
        """
        glyph1 = self.glyph_by_index(index1)
        if glyph1 is None:
            raise KeyError(index1)
        return glyph1.advance + self._kerning.get((index1, index2), 0.0)

    def advance_by_codepoint(self, codepoint1: int, codepoint2: int) -> float:
        """Return the advance between two characters, kerning included.

        Raises KeyError if either character has no glyph.
        """
        glyph1 = self.glyph_by_codepoint(codepoint1)
        if glyph1 is None:
            raise KeyError(codepoint1)
        glyph2 = self.glyph_by_codepoint(codepoint2)
        if glyph2 is None:
            raise KeyError(codepoint2)
        return glyph1.advance + self._kerning.get((glyph1.index, glyph2.index), 0.0)