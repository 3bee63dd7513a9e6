"""Mutable 4x4 float matrix with transforms, cameras and projections."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Union

from meshview.matrices import (
    Matrix2,
    Matrix3,
    _axis_rotation_rows,
    _check_invertible,
    _quaternion_rotation_rows,
    _SquareMatrix,
    determinant3x3,
)
from meshview.vectors import Vector3, Vector4


def _embed3(rows) -> "Matrix4":
    """Place a 3x3 block in the upper-left corner of a 4x4 identity."""
    m = Matrix4.identity()
    for i, row in enumerate(rows):
        m.set_row(i, (*row, 0.0))
    return m


class Matrix4(_SquareMatrix):
    """A 4x4 matrix; elements are given in row-major order."""

    _size = 4
    _vector = Vector4
    __slots__ = ()

    # -- construction -------------------------------------------------------

    @classmethod
    def filled(cls, fill: float) -> Matrix4:
        """A matrix with every element set to fill."""
        return cls._filled(fill)

    @classmethod
    def from_rows(cls, *args: Iterable[float]) -> Matrix4:
        """Build from four row vectors."""
        return cls._from_rows(args)

    @classmethod
    def from_columns(cls, *args: Iterable[float]) -> Matrix4:
        """Build from four column vectors."""
        return cls._from_columns(args)

    @classmethod
    def identity(cls) -> Matrix4:
        return cls._identity()

    @classmethod
    def ones(cls) -> Matrix4:
        return cls._filled(1.0)

    @classmethod
    def translation(
        cls,
        x: Union[float, Vector3],
        y: Optional[float] = None,
        z: Optional[float] = None,
    ) -> Matrix4:
        """Translation by (x, y, z); x may also be a Vector3 on its own."""
        if isinstance(x, Vector3):
            if y is not None or z is not None:
                raise TypeError("give either a Vector3 or three components")
            x, y, z = x
        elif y is None or z is None:
            raise TypeError("translation needs three components")
        return cls(
            1, 0, 0, x,
            0, 1, 0, y,
            0, 0, 1, z,
            0, 0, 0, 1,
        )

    @classmethod
    def rotate_x(cls, radians: float) -> Matrix4:
        c, s = math.cos(radians), math.sin(radians)
        return cls(
            1, 0, 0, 0,
            0, c, -s, 0,
            0, s, c, 0,
            0, 0, 0, 1,
        )

    @classmethod
    def rotate_y(cls, radians: float) -> Matrix4:
        c, s = math.cos(radians), math.sin(radians)
        return cls(
            c, 0, s, 0,
            0, 1, 0, 0,
            -s, 0, c, 0,
            0, 0, 0, 1,
        )

    @classmethod
    def rotate_z(cls, radians: float) -> Matrix4:
        c, s = math.cos(radians), math.sin(radians)
        return cls(
            c, -s, 0, 0,
            s, c, 0, 0,
            0, 0, 1, 0,
            0, 0, 0, 1,
        )

    @classmethod
    def rotation(cls, axis: Vector3, radians: float) -> Matrix4:
        """Rotation by an angle about an axis, which need not be unit length."""
        return _embed3(_axis_rotation_rows(axis, radians))

    @classmethod
    def rotation_from_quaternion(cls, w: float, x: float, y: float, z: float) -> Matrix4:
        """Rotation represented by the quaternion w + xi + yj + zk, normalized first."""
        return _embed3(_quaternion_rotation_rows(w, x, y, z))

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> Matrix4:
        return cls(
            sx, 0, 0, 0,
            0, sy, 0, 0,
            0, 0, sz, 0,
            0, 0, 0, 1,
        )

    @classmethod
    def uniform_scaling(cls, s: float) -> Matrix4:
        return cls.scaling(s, s, s)

    @classmethod
    def look_at(cls, eye: Vector3, center: Vector3, up: Vector3) -> Matrix4:
        """View matrix for a camera at eye looking towards center (z points backwards)."""
        z = (eye - center).normalized()
        y = up
        x = y.cross(z)
        return cls.from_rows(
            (*x, -x.dot(eye)),
            (*y, -y.dot(eye)),
            (*z, -z.dot(eye)),
            (0.0, 0.0, 0.0, 1.0),
        )

    @staticmethod
    def _set_depth(m: Matrix4, z_near: float, z_far: float, direct_x: bool) -> None:
        if direct_x:
            m[2, 2] = 1.0 / (z_near - z_far)
            m[2, 3] = z_near / (z_near - z_far)
        else:
            m[2, 2] = 2.0 / (z_near - z_far)
            m[2, 3] = (z_near + z_far) / (z_near - z_far)

    @classmethod
    def orthographic_projection(
        cls, width: float, height: float, z_near: float, z_far: float, direct_x: bool = False
    ) -> Matrix4:
        """Orthographic projection of the box [0, width] x [0, height]."""
        m = cls()
        m[0, 0] = 2.0 / width
        m[1, 1] = 2.0 / height
        m[3, 3] = 1.0
        m[0, 3] = -1.0
        m[1, 3] = -1.0
        cls._set_depth(m, z_near, z_far, direct_x)
        return m

    @classmethod
    def orthographic_projection_bounds(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        z_near: float,
        z_far: float,
        direct_x: bool = False,
    ) -> Matrix4:
        """Orthographic projection of the box [left, right] x [bottom, top]."""
        m = cls()
        m[0, 0] = 2.0 / (right - left)
        m[1, 1] = 2.0 / (top - bottom)
        m[3, 3] = 1.0
        m[0, 3] = (left + right) / (left - right)
        m[1, 3] = (top + bottom) / (bottom - top)
        cls._set_depth(m, z_near, z_far, direct_x)
        return m

    @classmethod
    def _frustum_base(
        cls, left: float, right: float, bottom: float, top: float, z_near: float
    ) -> Matrix4:
        m = cls()
        m[0, 0] = 2.0 * z_near / (right - left)
        m[1, 1] = 2.0 * z_near / (top - bottom)
        m[0, 2] = (right + left) / (right - left)
        m[1, 2] = (top + bottom) / (top - bottom)
        m[3, 2] = -1.0
        return m

    @classmethod
    def frustum_projection(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        z_near: float,
        z_far: float,
        direct_x: bool = False,
    ) -> Matrix4:
        """Perspective projection of an off-centre view frustum."""
        m = cls._frustum_base(left, right, bottom, top, z_near)
        if direct_x:
            m[2, 2] = z_far / (z_near - z_far)
            m[2, 3] = z_near * z_far / (z_near - z_far)
        else:
            m[2, 2] = (z_near + z_far) / (z_near - z_far)
            m[2, 3] = 2.0 * z_near * z_far / (z_near - z_far)
        return m

    @classmethod
    def perspective_projection(
        cls,
        fov_y_radians: float,
        aspect: float,
        z_near: float,
        z_far: float,
        direct_x: bool = False,
    ) -> Matrix4:
        """Symmetric perspective projection from a vertical field of view."""
        y_scale = 1.0 / math.tan(0.5 * fov_y_radians)
        x_scale = y_scale / aspect
        m = cls()
        m[0, 0] = x_scale
        m[1, 1] = y_scale
        m[3, 2] = -1.0
        if direct_x:
            m[2, 2] = z_far / (z_near - z_far)
            m[2, 3] = z_near * z_far / (z_near - z_far)
        else:
            m[2, 2] = (z_far + z_near) / (z_near - z_far)
            m[2, 3] = 2.0 * z_far * z_near / (z_near - z_far)
        return m

    @classmethod
    def infinite_perspective_projection(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        z_near: float,
        direct_x: bool = False,
    ) -> Matrix4:
        """Frustum projection in the limit of an infinitely distant far plane."""
        m = cls._frustum_base(left, right, bottom, top, z_near)
        m[2, 2] = -1.0
        m[2, 3] = -z_near if direct_x else -2.0 * z_near
        return m

    # -- rows, columns and blocks ------------------------------------------

    def row(self, i: int) -> Vector4:
        return self._row(i)

    def set_row(self, i: int, v: Iterable[float]) -> None:
        self._set_row(i, v)

    def column(self, j: int) -> Vector4:
        return self._column(j)

    def set_column(self, j: int, v: Iterable[float]) -> None:
        self._set_column(j, v)

    def submatrix2x2(self, i0: int, j0: int) -> Matrix2:
        """The 2x2 block whose upper-left corner is at (i0, j0)."""
        return self._submatrix(Matrix2, i0, j0)

    def submatrix3x3(self, i0: int, j0: int) -> Matrix3:
        """The 3x3 block whose upper-left corner is at (i0, j0)."""
        return self._submatrix(Matrix3, i0, j0)

    def set_submatrix2x2(self, i0: int, j0: int, m: Matrix2) -> None:
        """Overwrite the 2x2 block whose upper-left corner is at (i0, j0)."""
        self._set_submatrix(i0, j0, m)

    def set_submatrix3x3(self, i0: int, j0: int, m: Matrix3) -> None:
        """Overwrite the 3x3 block whose upper-left corner is at (i0, j0)."""
        self._set_submatrix(i0, j0, m)

    # -- algebra ------------------------------------------------------------

    def _cofactor(self, i: int, j: int) -> float:
        minor = [
            v
            for r, row in enumerate(self._rows) if r != i
            for c, v in enumerate(row) if c != j
        ]
        sign = -1.0 if (i + j) % 2 else 1.0
        return sign * determinant3x3(*minor)

    def determinant(self) -> float:
        return sum(self._rows[0][j] * self._cofactor(0, j) for j in range(4))

    def inverse(self, epsilon: float = 0.0) -> Matrix4:
        """The inverse; raises SingularMatrixError if |det| < epsilon or det is 0."""
        cofactors = [[self._cofactor(i, j) for j in range(4)] for i in range(4)]
        det = sum(self._rows[0][j] * cofactors[0][j] for j in range(4))
        _check_invertible(det, epsilon)
        r = 1.0 / det
        return Matrix4(*(cofactors[j][i] * r for i in range(4) for j in range(4)))

    def transpose(self) -> None:
        """Transpose in place."""
        self._transpose()

    def transposed(self) -> Matrix4:
        return self._transposed()