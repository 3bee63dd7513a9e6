import math

import pytest

from meshview.matrices import Matrix2, Matrix3, SingularMatrixError
from meshview.matrix4 import Matrix4
from meshview.vectors import Vector3, Vector4


def _flat(m):
    return [v for row in m.rows() for v in row]


def _sample():
    return Matrix4(
        2, 1, 0, 3,
        0, 1, 4, 1,
        5, 0, 1, 2,
        1, 2, 3, 7,
    )


IDENTITY_FLAT = [1.0 if i == j else 0.0 for i in range(4) for j in range(4)]


def test_default_is_zero_and_filled():
    assert Matrix4() == Matrix4.filled(0.0)
    assert all(v == 2.5 for row in Matrix4.filled(2.5).rows() for v in row)
    assert Matrix4.ones() == Matrix4.filled(1.0)


def test_identity_leaves_vector_unchanged():
    v = Vector4(1.5, -2.0, 3.0, 1.0)
    assert Matrix4.identity() @ v == v
    assert Matrix4.identity() @ _sample() == _sample()


def test_from_columns_is_transpose_of_from_rows():
    vs = [(1, 2, 3, 4), (5, 6, 7, 8), (9, 10, 11, 12), (13, 14, 15, 16)]
    assert Matrix4.from_columns(*vs) == Matrix4.from_rows(*vs).transposed()
    assert Matrix4.from_columns(*vs).column(2) == Vector4(9, 10, 11, 12)
    assert Matrix4.from_rows(*vs).row(1) == Vector4(5, 6, 7, 8)


def test_row_and_column_setters():
    m = Matrix4()
    m.set_row(1, Vector4(1, 2, 3, 4))
    m.set_column(3, Vector4(9, 9, 9, 9))
    assert m.row(1) == Vector4(1, 2, 3, 9)
    assert m.column(3) == Vector4(9, 9, 9, 9)


def test_column_major_order():
    m = _sample()
    flat = m.column_major()
    assert flat[:4] == tuple(m.column(0))
    assert flat[12:] == tuple(m.column(3))


def test_translation_moves_points_not_directions():
    t = Matrix4.translation(1, 2, 3)
    assert t @ Vector4(0, 0, 0, 1) == Vector4(1, 2, 3, 1)
    assert t @ Vector4(1, 1, 1, 0) == Vector4(1, 1, 1, 0)
    assert Matrix4.translation(Vector3(1, 2, 3)) == t


def test_translation_needs_three_components():
    with pytest.raises(TypeError):
        Matrix4.translation(1.0)


def test_axis_rotations_match_general_rotation():
    a = 0.7
    assert _flat(Matrix4.rotate_x(a)) == pytest.approx(
        _flat(Matrix4.rotation(Vector3(1, 0, 0), a)), abs=1e-9
    )
    assert _flat(Matrix4.rotate_y(a)) == pytest.approx(
        _flat(Matrix4.rotation(Vector3(0, 2, 0), a)), abs=1e-9
    )
    assert _flat(Matrix4.rotate_z(a)) == pytest.approx(
        _flat(Matrix4.rotation(Vector3(0, 0, 5), a)), abs=1e-9
    )


def test_quaternion_rotation_matches_axis_rotation():
    a = 1.1
    q = Matrix4.rotation_from_quaternion(math.cos(a / 2), 0, math.sin(a / 2), 0)
    assert _flat(q) == pytest.approx(_flat(Matrix4.rotate_y(a)), abs=1e-9)
    unnormalized = Matrix4.rotation_from_quaternion(3 * math.cos(a / 2), 0, 3 * math.sin(a / 2), 0)
    assert _flat(unnormalized) == pytest.approx(_flat(q), abs=1e-9)


def test_rotation_is_orthogonal_and_keeps_length():
    r = Matrix4.rotation(Vector3(1, 2, 3), 0.9)
    assert _flat(r @ r.transposed()) == pytest.approx(IDENTITY_FLAT, abs=1e-9)
    v = Vector4(3, -1, 2, 0)
    assert math.isclose((r @ v).length(), v.length())
    assert math.isclose(r.determinant(), 1.0)


def test_rotation_agrees_with_matrix3():
    r4 = Matrix4.rotation(Vector3(0, 1, 1), 0.4)
    r3 = Matrix3.rotation(Vector3(0, 1, 1), 0.4)
    assert _flat(r4.submatrix3x3(0, 0)) == pytest.approx(_flat(r3), abs=1e-9)
    assert r4.row(3) == Vector4(0, 0, 0, 1)


def test_scaling():
    s = Matrix4.scaling(2, 3, 4)
    assert s @ Vector4(1, 1, 1, 1) == Vector4(2, 3, 4, 1)
    assert Matrix4.uniform_scaling(2) == Matrix4.scaling(2, 2, 2)
    assert math.isclose(s.determinant(), 2 * 3 * 4)


def test_determinant_is_multiplicative():
    a = _sample()
    b = Matrix4.rotation(Vector3(1, 0, 1), 0.3) @ Matrix4.scaling(2, 1, 3)
    assert math.isclose((a @ b).determinant(), a.determinant() * b.determinant())
    assert math.isclose(a.transposed().determinant(), a.determinant())


def test_inverse_round_trip():
    a = _sample()
    inv = a.inverse()
    assert _flat(a @ inv) == pytest.approx(IDENTITY_FLAT, abs=1e-9)
    assert _flat(inv @ a) == pytest.approx(IDENTITY_FLAT, abs=1e-9)


def test_inverse_of_translation_undoes_it():
    t = Matrix4.translation(4, -5, 6)
    assert _flat(t.inverse()) == pytest.approx(
        _flat(Matrix4.translation(-4, 5, -6)), abs=1e-9
    )


def test_singular_inverse_raises():
    with pytest.raises(SingularMatrixError):
        Matrix4.ones().inverse()
    with pytest.raises(SingularMatrixError):
        Matrix4.uniform_scaling(0.01).inverse(epsilon=1e-3)


def test_transpose_in_place():
    m = _sample()
    expected = m.transposed()
    m.transpose()
    assert m == expected
    assert m[0, 2] == _sample()[2, 0]


def test_submatrix_round_trip():
    m = _sample()
    block2 = m.submatrix2x2(1, 2)
    block3 = m.submatrix3x3(1, 1)
    assert block2 == Matrix2.from_rows((4, 1), (1, 2))
    target = Matrix4()
    target.set_submatrix3x3(1, 1, block3)
    assert target.submatrix3x3(1, 1) == block3
    target.set_submatrix2x2(0, 0, Matrix2.identity())
    assert target.submatrix2x2(0, 0) == Matrix2.identity()


def test_submatrix_out_of_range():
    with pytest.raises(IndexError):
        _sample().submatrix3x3(2, 0)
    with pytest.raises(IndexError):
        Matrix4().set_submatrix2x2(3, 3, Matrix2.identity())


def test_look_at_maps_eye_to_origin_and_center_forward():
    eye = Vector3(0, 0, 5)
    view = Matrix4.look_at(eye, Vector3(0, 0, 0), Vector3(0, 1, 0))
    assert tuple(view @ Vector4.from_xyz(eye, 1)) == pytest.approx((0, 0, 0, 1), abs=1e-9)
    ahead = view @ Vector4(0, 0, 0, 1)
    assert ahead.z < 0
    assert tuple(ahead.xy) == pytest.approx((0, 0), abs=1e-9)


def _project_z(m, z):
    return (m @ Vector4(0, 0, z, 1)).homogenized().z


def test_perspective_maps_near_and_far_planes():
    m = Matrix4.perspective_projection(math.radians(50), 1.0, 1.0, 100.0)
    assert math.isclose(_project_z(m, -1.0), -1.0)
    assert math.isclose(_project_z(m, -100.0), 1.0)
    d = Matrix4.perspective_projection(math.radians(50), 1.0, 1.0, 100.0, True)
    assert math.isclose(_project_z(d, -1.0), 0.0, abs_tol=1e-12)
    assert math.isclose(_project_z(d, -100.0), 1.0)


@pytest.mark.parametrize("dx", [False, True])
def test_symmetric_frustum_matches_perspective(dx):
    fov, aspect, n, f = 0.8, 1.5, 0.5, 40.0
    top = n * math.tan(fov / 2)
    right = top * aspect
    a = Matrix4.frustum_projection(-right, right, -top, top, n, f, dx)
    b = Matrix4.perspective_projection(fov, aspect, n, f, dx)
    assert _flat(a) == pytest.approx(_flat(b), abs=1e-9)


@pytest.mark.parametrize("dx", [False, True])
def test_infinite_projection_is_limit_of_frustum(dx):
    inf = Matrix4.infinite_perspective_projection(-1, 1, -1, 1, 1.0, dx)
    far = Matrix4.frustum_projection(-1, 1, -1, 1, 1.0, 1e9, dx)
    assert _flat(inf) == pytest.approx(_flat(far), abs=1e-6)


def test_orthographic_maps_box_corners():
    m = Matrix4.orthographic_projection(4.0, 2.0, 1.0, 10.0)
    assert tuple(m @ Vector4(0, 0, -1, 1)) == pytest.approx((-1, -1, -1, 1), abs=1e-9)
    assert tuple(m @ Vector4(4, 2, -10, 1)) == pytest.approx((1, 1, 1, 1), abs=1e-9)


@pytest.mark.parametrize("dx", [False, True])
def test_orthographic_bounds_generalises_width_height(dx):
    a = Matrix4.orthographic_projection_bounds(0, 4, 0, 2, 1, 10, dx)
    b = Matrix4.orthographic_projection(4, 2, 1, 10, dx)
    assert _flat(a) == pytest.approx(_flat(b), abs=1e-9)


def test_orthographic_bounds_maps_corners():
    m = Matrix4.orthographic_projection_bounds(-3, 5, -2, 6, 1, 10, False)
    assert tuple((m @ Vector4(-3, -2, -1, 1)).xy) == pytest.approx((-1, -1), abs=1e-9)
    assert tuple((m @ Vector4(5, 6, -1, 1)).xy) == pytest.approx((1, 1), abs=1e-9)


def test_scalar_multiplication():
    m = 2 * _sample()
    assert m == _sample() * 2
    assert m[3, 3] == 2 * _sample()[3, 3]


def test_wrong_element_count_rejected():
    with pytest.raises(ValueError):
        Matrix4(1, 2, 3)
    with pytest.raises(ValueError):
        Matrix4.from_rows((1, 2, 3, 4))