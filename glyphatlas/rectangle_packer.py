"""Guillotine packing of rectangles into a single bin."""

from __future__ import annotations

from typing import MutableSequence, Sequence, TypeVar

from .rectangle import OrientedRectangle, Rectangle

_WORST_FIT = 0x7FFFFFFF

_T = TypeVar("_T")


def _remove_unordered(items: MutableSequence[_T], index: int) -> None:
    """Remove an item by moving the last item into its place."""
    last = items.pop()
    if index < len(items):
        items[index] = last


def _rate_fit(w: int, h: int, sw: int, sh: int) -> int:
    return min(sw - w, sh - h)


class RectanglePacker:
    """Guillotine 2D single bin packer."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self._spaces: list[Rectangle] = []
        if width > 0 and height > 0:
            self._spaces.append(Rectangle(0, 0, width, height))

    def expand(self, width: int, height: int) -> None:
        """Enlarge the packing area; dimensions must not shrink."""
        if width > 0 and height > 0:
            old_width = max((s.x + s.w for s in self._spaces), default=0)
            old_height = max((s.y + s.h for s in self._spaces), default=0)
            old_width = max(old_width, 0)
            old_height = max(old_height, 0)
            self._spaces.append(Rectangle(0, 0, width, height))
            self._split_space(len(self._spaces) - 1, old_width, old_height)

    def _split_space(self, index: int, w: int, h: int) -> None:
        space = self._spaces[index]
        _remove_unordered(self._spaces, index)
        a = Rectangle(space.x, space.y + h, w, space.h - h)
        b = Rectangle(space.x + w, space.y, space.w - w, h)
        if w * (space.h - h) < h * (space.w - w):
            a.w = space.w
        else:
            b.h = space.h
        if a.w > 0 and a.h > 0:
            self._spaces.append(a)
        if b.w > 0 and b.h > 0:
            self._spaces.append(b)

    def _best_fit(
        self, rectangles: Sequence[Rectangle], remaining: list[int]
    ) -> tuple[int, int] | None:
        best_fit = _WORST_FIT
        best: tuple[int, int] | None = None
        for space_index, space in enumerate(self._spaces):
            for slot, rect_index in enumerate(remaining):
                rect = rectangles[rect_index]
                if rect.w == space.w and rect.h == space.h:
                    return space_index, slot
                if rect.w <= space.w and rect.h <= space.h:
                    fit = _rate_fit(rect.w, rect.h, space.w, space.h)
                    if fit < best_fit:
                        best = (space_index, slot)
                        best_fit = fit
        return best

    def pack(self, rectangles: Sequence[Rectangle]) -> int:
        """Place the rectangles, setting their positions; return how many did not fit."""
        remaining = list(range(len(rectangles)))
        while remaining:
            found = self._best_fit(rectangles, remaining)
            if found is None:
                break
            space_index, slot = found
            rect = rectangles[remaining[slot]]
            space = self._spaces[space_index]
            rect.x, rect.y = space.x, space.y
            self._split_space(space_index, rect.w, rect.h)
            _remove_unordered(remaining, slot)
        return len(remaining)

    def _best_oriented_fit(
        self, rectangles: Sequence[OrientedRectangle], remaining: list[int]
    ) -> tuple[int, int, bool] | None:
        best_fit = _WORST_FIT
        best: tuple[int, int, bool] | None = None
        for space_index, space in enumerate(self._spaces):
            for slot, rect_index in enumerate(remaining):
                rect = rectangles[rect_index]
                if rect.w == space.w and rect.h == space.h:
                    return space_index, slot, False
                if rect.h == space.w and rect.w == space.h:
                    return space_index, slot, True
                if rect.w <= space.w and rect.h <= space.h:
                    fit = _rate_fit(rect.w, rect.h, space.w, space.h)
                    if fit < best_fit:
                        best = (space_index, slot, False)
                        best_fit = fit
                if rect.h <= space.w and rect.w <= space.h:
                    fit = _rate_fit(rect.h, rect.w, space.w, space.h)
                    if fit < best_fit:
                        best = (space_index, slot, True)
                        best_fit = fit
        return best

    def pack_oriented(self, rectangles: Sequence[OrientedRectangle]) -> int:
        """Place the rectangles, rotating them where that fits better; return how many did not fit."""
        remaining = list(range(len(rectangles)))
        while remaining:
            found = self._best_oriented_fit(rectangles, remaining)
            if found is None:
                break
            space_index, slot, rotated = found
            rect = rectangles[remaining[slot]]
            space = self._spaces[space_index]
            rect.x, rect.y = space.x, space.y
            rect.rotated = rotated
            if rotated:
                self._split_space(space_index, rect.h, rect.w)
            else:
                self._split_space(space_index, rect.w, rect.h)
            _remove_unordered(remaining, slot)
        return len(remaining)