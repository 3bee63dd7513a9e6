"""Mutable 2x2 and 3x3 float matrices with the usual graphics helpers."""

from __future__ import annotations

import math
from typing import ClassVar, Iterable, Tuple, Type, TypeVar

from meshview.vectors import Vector2, Vector3

_M = TypeVar("_M", bound="_SquareMatrix")


class SingularMatrixError(ZeroDivisionError):
    """Raised when a matrix is too close to singular to be inverted."""


def determinant2x2(m00: float, m01: float, m10: float, m11: float) -> float:
    """Determinant of the 2x2 matrix given in row-major order."""
    return m00 * m11 - m01 * m10


def determinant3x3(
    m00: float, m01: float, m02: float,
    m10: float, m11: float, m12: float,
    m20: float, m21: float, m22: float,
) -> float:
    """Determinant of the 3x3 matrix given in row-major order."""
    return (
        m00 * (m11 * m22 - m12 * m21)
        - m01 * (m10 * m22 - m12 * m20)
        + m02 * (m10 * m21 - m11 * m20)
    )


def _check_invertible(det: float, epsilon: float) -> None:
    if det == 0 or abs(det) < epsilon:
        raise SingularMatrixError(f"matrix is singular (determinant {det!r})")


def _normalized_quaternion(w: float, x: float, y: float, z: float) -> Tuple[float, float, float, float]:
    norm = math.sqrt(w * w + x * x + y * y + z * z)
    return w / norm, x / norm, y / norm, z / norm


def _quaternion_rotation_rows(w: float, x: float, y: float, z: float):
    w, x, y, z = _normalized_quaternion(w, x, y, z)
    xx, yy, zz = x * x, y * y, z * z
    xy, zw = x * y, z * w
    xz, yw = x * z, y * w
    yz, xw = y * z, x * w
    return (
        (1.0 - 2.0 * (yy + zz), 2.0 * (xy - zw), 2.0 * (xz + yw)),
        (2.0 * (xy + zw), 1.0 - 2.0 * (xx + zz), 2.0 * (yz - xw)),
        (2.0 * (xz - yw), 2.0 * (yz + xw), 1.0 - 2.0 * (xx + yy)),
    )


def _axis_rotation_rows(axis: Vector3, radians: float):
    x, y, z = axis.normalized()
    c = math.cos(radians)
    s = math.sin(radians)
    t = 1.0 - c
    return (
        (x * x * t + c, y * x * t - z * s, z * x * t + y * s),
        (x * y * t + z * s, y * y * t + c, z * y * t - x * s),
        (x * z * t - y * s, y * z * t + x * s, z * z * t + c),
    )


class _SquareMatrix:
    """Shared storage and arithmetic for square matrices of a fixed size."""

    _size: ClassVar[int]
    _vector: ClassVar[type]

    __slots__ = ("_rows",)

    def __init__(self, *elements: float) -> None:
        n = self._size
        if not elements:
            elements = (0.0,) * (n * n)
        if len(elements) != n * n:
            raise ValueError(f"{type(self).__name__} takes {n * n} elements, got {len(elements)}")
        values = [float(e) for e in elements]
        self._rows = [values[r * n:(r + 1) * n] for r in range(n)]

    # -- construction -------------------------------------------------------

    @classmethod
    def _filled(cls: Type[_M], fill: float) -> _M:
        return cls(*([fill] * (cls._size * cls._size)))

    @classmethod
    def _from_rows(cls: Type[_M], rows: Tuple[Iterable[float], ...]) -> _M:
        n = cls._size
        if len(rows) != n:
            raise ValueError(f"{cls.__name__} needs {n} rows, got {len(rows)}")
        flat = []
        for row in rows:
            values = list(row)
            if len(values) != n:
                raise ValueError(f"each row of {cls.__name__} needs {n} values")
            flat.extend(values)
        return cls(*flat)

    @classmethod
    def _from_columns(cls: Type[_M], columns: Tuple[Iterable[float], ...]) -> _M:
        m = cls._from_rows(columns)
        m._transpose()
        return m

    @classmethod
    def _identity(cls: Type[_M]) -> _M:
        n = cls._size
        return cls(*(1.0 if r == c else 0.0 for r in range(n) for c in range(n)))

    # -- element access -----------------------------------------------------

    def _check(self, index: int) -> int:
        if not 0 <= index < self._size:
            raise IndexError(f"index {index} out of range for {type(self).__name__}")
        return index

    def __getitem__(self, key: Tuple[int, int]) -> float:
        i, j = key
        return self._rows[self._check(i)][self._check(j)]

    def __setitem__(self, key: Tuple[int, int], value: float) -> None:
        i, j = key
        self._rows[self._check(i)][self._check(j)] = float(value)

    def _row(self, i: int):
        return self._vector(*self._rows[self._check(i)])

    def _set_row(self, i: int, v: Iterable[float]) -> None:
        values = [float(a) for a in v]
        if len(values) != self._size:
            raise ValueError(f"row needs {self._size} values")
        self._rows[self._check(i)] = values

    def _column(self, j: int):
        self._check(j)
        return self._vector(*(row[j] for row in self._rows))

    def _set_column(self, j: int, v: Iterable[float]) -> None:
        self._check(j)
        values = [float(a) for a in v]
        if len(values) != self._size:
            raise ValueError(f"column needs {self._size} values")
        for row, value in zip(self._rows, values):
            row[j] = value

    def _transpose(self) -> None:
        self._rows = [list(column) for column in zip(*self._rows)]

    def _transposed(self: _M) -> _M:
        out = self.copy()
        out._transpose()
        return out

    def _submatrix(self, target: Type[_M], i0: int, j0: int) -> _M:
        k = target._size
        if not (0 <= i0 and 0 <= j0 and i0 + k <= self._size and j0 + k <= self._size):
            raise IndexError(f"{k}x{k} block at ({i0}, {j0}) does not fit")
        return target._from_rows(tuple(row[j0:j0 + k] for row in self._rows[i0:i0 + k]))

    def _set_submatrix(self, i0: int, j0: int, m: "_SquareMatrix") -> None:
        k = m._size
        if not (0 <= i0 and 0 <= j0 and i0 + k <= self._size and j0 + k <= self._size):
            raise IndexError(f"{k}x{k} block at ({i0}, {j0}) does not fit")
        for i, row in enumerate(m._rows):
            self._rows[i0 + i][j0:j0 + k] = row

    # -- utilities ----------------------------------------------------------

    def copy(self: _M) -> _M:
        """An independent copy."""
        return type(self)(*(v for row in self._rows for v in row))

    def rows(self) -> Tuple[Tuple[float, ...], ...]:
        """The elements as a tuple of row tuples."""
        return tuple(tuple(row) for row in self._rows)

    def column_major(self) -> Tuple[float, ...]:
        """The elements in column-major order, as OpenGL expects them."""
        return tuple(v for column in zip(*self._rows) for v in column)

    # -- arithmetic ---------------------------------------------------------

    def __mul__(self: _M, other: float) -> _M:
        if not isinstance(other, (int, float)):
            return NotImplemented
        return type(self)(*(other * v for row in self._rows for v in row))

    def __rmul__(self: _M, other: float) -> _M:
        return self.__mul__(other)

    def __matmul__(self, other):
        if isinstance(other, type(self)):
            columns = list(zip(*other._rows))
            return type(self)(
                *(sum(a * b for a, b in zip(row, col)) for row in self._rows for col in columns)
            )
        if isinstance(other, self._vector):
            return self._vector(*(sum(a * b for a, b in zip(row, other)) for row in self._rows))
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_rows({', '.join(repr(tuple(r)) for r in self._rows)})"

    def __str__(self) -> str:
        return "\n".join(
            "[ " + " ".join(f"{v:.4f}" for v in row) + " ]" for row in self._rows
        )


class Matrix2(_SquareMatrix):
    """A 2x2 matrix; elements are given in row-major order."""

    _size = 2
    _vector = Vector2
    __slots__ = ()

    @classmethod
    def filled(cls, fill: float) -> Matrix2:
        """A matrix with every element set to fill."""
        return cls._filled(fill)

    @classmethod
    def from_rows(cls, *args: Iterable[float]) -> Matrix2:
        """Build from two row vectors."""
        return cls._from_rows(args)

    @classmethod
    def from_columns(cls, *args: Iterable[float]) -> Matrix2:
        """Build from two column vectors."""
        return cls._from_columns(args)

    @classmethod
    def identity(cls) -> Matrix2:
        return cls._identity()

    @classmethod
    def ones(cls) -> Matrix2:
        return cls._filled(1.0)

    @classmethod
    def rotation(cls, radians: float) -> Matrix2:
        """Counter-clockwise rotation by the given angle."""
        c = math.cos(radians)
        s = math.sin(radians)
        return cls(c, -s, s, c)

    def row(self, i: int) -> Vector2:
        return self._row(i)

    def set_row(self, i: int, v: Iterable[float]) -> None:
        self._set_row(i, v)

    def column(self, j: int) -> Vector2:
        return self._column(j)

    def set_column(self, j: int, v: Iterable[float]) -> None:
        self._set_column(j, v)

    def determinant(self) -> float:
        (m00, m01), (m10, m11) = self._rows
        return determinant2x2(m00, m01, m10, m11)

    def inverse(self, epsilon: float = 0.0) -> Matrix2:
        """The inverse; raises SingularMatrixError if |det| < epsilon or det is 0."""
        (m00, m01), (m10, m11) = self._rows
        det = determinant2x2(m00, m01, m10, m11)
        _check_invertible(det, epsilon)
        r = 1.0 / det
        return Matrix2(m11 * r, -m01 * r, -m10 * r, m00 * r)

    def transpose(self) -> None:
        """Transpose in place."""
        self._transpose()

    def transposed(self) -> Matrix2:
        return self._transposed()


class Matrix3(_SquareMatrix):
    """A 3x3 matrix; elements are given in row-major order."""

    _size = 3
    _vector = Vector3
    __slots__ = ()

    @classmethod
    def filled(cls, fill: float) -> Matrix3:
        """A matrix with every element set to fill."""
        return cls._filled(fill)

    @classmethod
    def from_rows(cls, *args: Iterable[float]) -> Matrix3:
        """Build from three row vectors."""
        return cls._from_rows(args)

    @classmethod
    def from_columns(cls, *args: Iterable[float]) -> Matrix3:
        """Build from three column vectors."""
        return cls._from_columns(args)

    @classmethod
    def identity(cls) -> Matrix3:
        return cls._identity()

    @classmethod
    def ones(cls) -> Matrix3:
        return cls._filled(1.0)

    @classmethod
    def rotate_x(cls, radians: float) -> Matrix3:
        c, s = math.cos(radians), math.sin(radians)
        return cls(1, 0, 0, 0, c, -s, 0, s, c)

    @classmethod
    def rotate_y(cls, radians: float) -> Matrix3:
        c, s = math.cos(radians), math.sin(radians)
        return cls(c, 0, s, 0, 1, 0, -s, 0, c)

    @classmethod
    def rotate_z(cls, radians: float) -> Matrix3:
        c, s = math.cos(radians), math.sin(radians)
        return cls(c, -s, 0, s, c, 0, 0, 0, 1)

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> Matrix3:
        return cls(sx, 0, 0, 0, sy, 0, 0, 0, sz)

    @classmethod
    def uniform_scaling(cls, s: float) -> Matrix3:
        return cls.scaling(s, s, s)

    @classmethod
    def rotation(cls, axis: Vector3, radians: float) -> Matrix3:
        """Rotation by an angle about an axis, which need not be unit length."""
        return cls._from_rows(_axis_rotation_rows(axis, radians))

    @classmethod
    def rotation_from_quaternion(cls, w: float, x: float, y: float, z: float) -> Matrix3:
        """Rotation represented by the quaternion w + xi + yj + zk, normalized first."""
        return cls._from_rows(_quaternion_rotation_rows(w, x, y, z))

    def row(self, i: int) -> Vector3:
        return self._row(i)

    def set_row(self, i: int, v: Iterable[float]) -> None:
        self._set_row(i, v)

    def column(self, j: int) -> Vector3:
        return self._column(j)

    def set_column(self, j: int, v: Iterable[float]) -> None:
        self._set_column(j, v)

    def submatrix2x2(self, i0: int, j0: int) -> Matrix2:
        """The 2x2 block whose upper-left corner is at (i0, j0)."""
        return self._submatrix(Matrix2, i0, j0)

    def set_submatrix2x2(self, i0: int, j0: int, m: Matrix2) -> None:
        """Overwrite the 2x2 block whose upper-left corner is at (i0, j0)."""
        self._set_submatrix(i0, j0, m)

    def determinant(self) -> float:
        return determinant3x3(*(v for row in self._rows for v in row))

    def inverse(self, epsilon: float = 0.0) -> Matrix3:
        """The inverse; raises SingularMatrixError if |det| < epsilon or det is 0."""
        (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = self._rows

        c00 = determinant2x2(m11, m12, m21, m22)
        c01 = -determinant2x2(m10, m12, m20, m22)
        c02 = determinant2x2(m10, m11, m20, m21)
        c10 = -determinant2x2(m01, m02, m21, m22)
        c11 = determinant2x2(m00, m02, m20, m22)
        c12 = -determinant2x2(m00, m01, m20, m21)
        c20 = determinant2x2(m01, m02, m11, m12)
        c21 = -determinant2x2(m00, m02, m10, m12)
        c22 = determinant2x2(m00, m01, m10, m11)

        det = m00 * c00 + m01 * c01 + m02 * c02
        _check_invertible(det, epsilon)
        r = 1.0 / det
        return Matrix3(
            c00 * r, c10 * r, c20 * r,
            c01 * r, c11 * r, c21 * r,
            c02 * r, c12 * r, c22 * r,
        )

    def transpose(self) -> None:
        """Transpose in place."""
        self._transpose()

    def transposed(self) -> Matrix3:
        return self._transposed()