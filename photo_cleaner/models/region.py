from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Region:
    """
    Axis-aligned rectangle in pixel coordinates.
    x, y is the top-left corner; the right/bottom edges are exclusive.
    """
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def clip(self, width: int, height: int) -> Region:
        """Intersect with an image of the given size (may return an empty region)."""
        x0 = max(0, self.x)
        y0 = max(0, self.y)
        x1 = min(width, self.right)
        y1 = min(height, self.bottom)
        return Region(x0, y0, max(0, x1 - x0), max(0, y1 - y0))

    def expand(self, padding: int, width: int, height: int) -> Region:
        """Grow by `padding` on every side, clipped to the image bounds."""
        return Region(self.x - padding, self.y - padding,
                      self.width + 2 * padding,
                      self.height + 2 * padding).clip(width, height)

    def overlaps(self, other: Region) -> bool:
        return (self.x < other.right and other.x < self.right
                and self.y < other.bottom and other.y < self.bottom)

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
