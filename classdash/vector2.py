"""Two-dimensional vector used for positions, velocities and sizes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True, slots=True)
class Vector2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale):
        if not isinstance(scale, Real):
            return NotImplemented
        return Vector2(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale):
        if not isinstance(scale, Real):
            return NotImplemented
        return Vector2(self.x / scale, self.y / scale)

    def __neg__(self):
        return Vector2(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self):
        return f"({self.x:g}, {self.y:g})"

    def magnitude(self):
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normal(self):
        """Unit vector in the same direction; the zero vector stays as it is."""
        mag = self.magnitude()
        return self if mag == 0 else self / mag