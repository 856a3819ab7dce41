"""Square region selection: geometry, drag state and cropping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image

Point = Tuple[int, int]

MIN_SELECTION_SIZE = 10


@dataclass(frozen=True)
class Rect:
    """An integer rectangle; empty (invalid) unless both sides are positive."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def from_points(cls, start: Point, end: Point) -> "Rect":
        """Return the normalized rectangle with ``start`` and ``end`` as inclusive corners."""
        x1, x2 = start[0], end[0]
        y1, y2 = start[1], end[1]
        if x2 < x1 - 1:
            x1, x2 = x2, x1
        if y2 < y1 - 1:
            y1, y2 = y2, y1
        return cls(x1, y1, x2 - x1 + 1, y2 - y1 + 1)

    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def bottom_right(self) -> Point:
        """Return the last pixel inside the rectangle."""
        return (self.x + self.width - 1, self.y + self.height - 1)


def square_rect(rect: Rect) -> Rect:
    """Shrink ``rect`` to a square of its shorter side, keeping the top-left corner."""
    size = min(rect.width, rect.height)
    return Rect(rect.x, rect.y, size, size)


def dimension_label(rect: Rect) -> str:
    """Return the ``W x H`` text shown next to a selection."""
    return f"{rect.width} x {rect.height}"


def crop(image: Image.Image, rect: Rect) -> Optional[Image.Image]:
    """Return the part of ``image`` under ``rect``, or None if ``rect`` is empty."""
    if not rect.is_valid():
        return None
    return image.crop((rect.x, rect.y, rect.x + rect.width, rect.y + rect.height))


class RegionSelection:
    """Tracks a left-button drag and keeps the selection square."""

    def __init__(self) -> None:
        self.selecting = False
        self.start: Point = (0, 0)
        self.end: Point = (0, 0)
        self.rect = Rect()

    def reset(self) -> None:
        """Forget any selection in progress."""
        self.selecting = False
        self.start = (0, 0)
        self.end = (0, 0)
        self.rect = Rect()

    def _update(self, x: int, y: int) -> Rect:
        self.end = (x, y)
        self.rect = square_rect(Rect.from_points(self.start, self.end))
        return self.rect

    def press(self, x: int, y: int) -> Rect:
        """Begin a selection at ``(x, y)`` and return the current rectangle."""
        self.selecting = True
        self.start = (x, y)
        return self._update(x, y)

    def move(self, x: int, y: int) -> Optional[Rect]:
        """Extend the selection; return the rectangle, or None if not selecting."""
        if not self.selecting:
            return None
        return self._update(x, y)

    def release(self, x: int, y: int) -> Optional[Rect]:
        """Finish the selection; return it if larger than the minimum size."""
        if not self.selecting:
            return None
        self.selecting = False
        rect = self._update(x, y)
        if rect.is_valid() and rect.width > MIN_SELECTION_SIZE and rect.height > MIN_SELECTION_SIZE:
            return rect
        return None