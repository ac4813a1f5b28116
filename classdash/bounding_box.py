"""Axis-aligned bounding boxes for collision checks."""

from __future__ import annotations

from dataclasses import dataclass

from classdash.vector2 import Vector2


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """A box given by its top-left offset and its size."""

    offset: Vector2 = Vector2()
    size: Vector2 = Vector2()

    @property
    def top_y(self):
        return self.offset.y

    @property
    def bottom_y(self):
        return self.offset.y + self.size.y

    @property
    def left_x(self):
        return self.offset.x

    @property
    def right_x(self):
        return self.offset.x + self.size.x

    def __add__(self, position):
        """Return the box moved by ``position``."""
        if not isinstance(position, Vector2):
            return NotImplemented
        return BoundingBox(self.offset + position, self.size)

    def overlaps(self, box):
        """True if the two boxes touch or intersect (edges count)."""
        if self.right_x < box.left_x:
            return False
        if self.left_x > box.right_x:
            return False
        if self.top_y > box.bottom_y:
            return False
        if self.bottom_y < box.top_y:
            return False
        return True