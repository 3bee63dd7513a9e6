"""Small immutable 2-, 3- and 4-component float vectors."""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from typing import Iterator, TypeVar, Union

_V = TypeVar("_V", bound="_VectorOps")


class _VectorOps:
    """Component-wise arithmetic shared by the vector classes."""

    def __iter__(self) -> Iterator[float]:
        return iter(astuple(self))

    def __len__(self) -> int:
        return len(astuple(self))

    def __getitem__(self, index: int) -> float:
        return astuple(self)[index]

    def _combine(self: _V, other: Union[_V, float], op) -> _V:
        if isinstance(other, type(self)):
            return type(self)(*(op(a, b) for a, b in zip(self, other)))
        if isinstance(other, (int, float)):
            return type(self)(*(op(a, other) for a in self))
        return NotImplemented

    def __add__(self: _V, other: _V) -> _V:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self: _V, other: _V) -> _V:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._combine(other, lambda a, b: a - b)

    def __mul__(self: _V, other: Union[_V, float]) -> _V:
        return self._combine(other, lambda a, b: a * b)

    def __rmul__(self: _V, other: float) -> _V:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return type(self)(*(other * a for a in self))

    def __truediv__(self: _V, other: Union[_V, float]) -> _V:
        return self._combine(other, lambda a, b: a / b)

    def __neg__(self: _V) -> _V:
        return type(self)(*(-a for a in self))

    def length_squared(self) -> float:
        """Sum of the squared components."""
        return sum(a * a for a in self)

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalized(self: _V) -> _V:
        """A copy scaled to unit length; raises ZeroDivisionError for a zero vector."""
        norm = self.length()
        return type(self)(*(a / norm for a in self))

    def dot(self: _V, other: _V) -> float:
        """Dot product with another vector of the same size."""
        return sum(a * b for a, b in zip(self, other))

    def lerp(self: _V, other: _V, alpha: float) -> _V:
        """Linear interpolation: self at alpha 0, other at alpha 1."""
        return alpha * (other - self) + self


@dataclass(frozen=True)
class Vector2(_VectorOps):
    """A 2D vector."""

    x: float = 0.0
    y: float = 0.0

    @property
    def xy(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def yx(self) -> Vector2:
        return Vector2(self.y, self.x)

    @property
    def xx(self) -> Vector2:
        return Vector2(self.x, self.x)

    @property
    def yy(self) -> Vector2:
        return Vector2(self.y, self.y)

    def normal(self) -> Vector2:
        """The perpendicular vector (-y, x)."""
        return Vector2(-self.y, self.x)

    def length(self) -> float:
        return super().length()

    def length_squared(self) -> float:
        return super().length_squared()

    def normalized(self) -> Vector2:
        return super().normalized()

    def dot(self, other: Vector2) -> float:
        return super().dot(other)

    def cross(self, other: Vector2) -> Vector3:
        """Cross product of the two vectors lifted into the z = 0 plane."""
        return Vector3(0.0, 0.0, self.x * other.y - self.y * other.x)

    def lerp(self, other: Vector2, alpha: float) -> Vector2:
        return super().lerp(other, alpha)


@dataclass(frozen=True)
class Vector3(_VectorOps):
    """A 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def xy(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def xz(self) -> Vector2:
        return Vector2(self.x, self.z)

    @property
    def yz(self) -> Vector2:
        return Vector2(self.y, self.z)

    @property
    def xyz(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    @property
    def yzx(self) -> Vector3:
        return Vector3(self.y, self.z, self.x)

    @property
    def zxy(self) -> Vector3:
        return Vector3(self.z, self.x, self.y)

    def length(self) -> float:
        return super().length()

    def length_squared(self) -> float:
        return super().length_squared()

    def normalized(self) -> Vector3:
        return super().normalized()

    def dot(self, other: Vector3) -> float:
        return super().dot(other)

    def cross(self, other: Vector3) -> Vector3:
        """Right-handed cross product."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def lerp(self, other: Vector3, alpha: float) -> Vector3:
        return super().lerp(other, alpha)


@dataclass(frozen=True)
class Vector4(_VectorOps):
    """A 4D (homogeneous) vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @classmethod
    def from_xyz(cls, xyz: Vector3, w: float) -> Vector4:
        """Build from a 3D vector and a w component."""
        return cls(xyz.x, xyz.y, xyz.z, w)

    @property
    def xy(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def yz(self) -> Vector2:
        return Vector2(self.y, self.z)

    @property
    def zw(self) -> Vector2:
        return Vector2(self.z, self.w)

    @property
    def wx(self) -> Vector2:
        return Vector2(self.w, self.x)

    @property
    def xyz(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    @property
    def yzw(self) -> Vector3:
        return Vector3(self.y, self.z, self.w)

    @property
    def zwx(self) -> Vector3:
        return Vector3(self.z, self.w, self.x)

    @property
    def wxy(self) -> Vector3:
        return Vector3(self.w, self.x, self.y)

    @property
    def xyw(self) -> Vector3:
        return Vector3(self.x, self.y, self.w)

    @property
    def yzx(self) -> Vector3:
        return Vector3(self.y, self.z, self.x)

    @property
    def zwy(self) -> Vector3:
        return Vector3(self.z, self.w, self.y)

    @property
    def wxz(self) -> Vector3:
        return Vector3(self.w, self.x, self.z)

    def length(self) -> float:
        return super().length()

    def length_squared(self) -> float:
        return super().length_squared()

    def normalized(self) -> Vector4:
        return super().normalized()

    def homogenized(self) -> Vector4:
        """Divide by w and set w to 1; unchanged when w is 0."""
        if self.w != 0:
            return Vector4(self.x / self.w, self.y / self.w, self.z / self.w, 1.0)
        return Vector4(self.x, self.y, self.z, self.w)

    def dot(self, other: Vector4) -> float:
        return super().dot(other)

    def lerp(self, other: Vector4, alpha: float) -> Vector4:
        return super().lerp(other, alpha)