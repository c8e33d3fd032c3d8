"""A minimal immutable three-dimensional point."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True)
class Point3D:
    """A point or vector in 3D space."""

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Point3D:
        """The origin."""
        return cls(0.0, 0.0, 0.0)

    def is_zero(self) -> bool:
        """Whether all components are exactly zero."""
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def offset(self, dx: float, dy: float, dz: float) -> Point3D:
        """Return the point moved by the given deltas."""
        return Point3D(self.x + dx, self.y + dy, self.z + dz)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def __add__(self, other: object) -> Point3D:
        if not isinstance(other, Point3D):
            return NotImplemented
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Point3D:
        if not isinstance(other, Point3D):
            return NotImplemented
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: object) -> Point3D:
        if not isinstance(factor, Real):
            return NotImplemented
        return Point3D(self.x * factor, self.y * factor, self.z * factor)

    def __truediv__(self, factor: object) -> Point3D:
        if not isinstance(factor, Real):
            return NotImplemented
        return Point3D(self.x / factor, self.y / factor, self.z / factor)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z