import math

import numpy as np
import pytest

from transform import (Mat4, format_matrix, identity, multiply, perspective,
                       rotate_x, rotate_y, rotate_z, scale, translate)


def _sample():
    return Mat4([0.5, 1.0, -2.0, 0.0,
                 3.0, 0.25, 1.5, 0.0,
                 -1.0, 2.0, 0.75, 0.0,
                 4.0, -5.0, 6.0, 1.0])


def _project(m, point):
    x, y, z, w = m.apply(point)
    return np.array([x / w, y / w, z / w])


def test_identity_is_neutral_for_multiply():
    m = _sample()
    assert multiply(identity(), m) == m
    assert multiply(m, identity()) == m


def test_multiply_is_associative():
    a = rotate_x(0.3)
    b = translate(1.0, -2.0, 0.5)
    c = multiply(rotate_z(1.1), scale(2.0))
    left = multiply(a, multiply(b, c))
    right = multiply(multiply(a, b), c)
    np.testing.assert_allclose(left.data, right.data, rtol=1e-5, atol=1e-6)


def test_multiply_is_not_commutative():
    a = translate(1.0, 0.0, 0.0)
    b = rotate_z(math.pi / 2)
    assert not multiply(a, b).allclose(multiply(b, a))


def test_multiply_applies_right_operand_first():
    # rotate (1,0,0) to (0,1,0), then move by +x
    m = multiply(translate(1.0, 0.0, 0.0), rotate_z(math.pi / 2))
    np.testing.assert_allclose(m.apply([1.0, 0.0, 0.0, 1.0]), [1.0, 1.0, 0.0, 1.0], atol=1e-6)


def test_zero_rotations_are_identity():
    assert rotate_x(0.0) == identity()
    assert rotate_y(0.0) == identity()
    assert rotate_z(0.0) == identity()


@pytest.mark.parametrize("theta", [0.3, 1.0, -2.2, math.pi / 2])
def test_rotate_z_sign_convention(theta):
    out = rotate_z(theta).apply([1.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(out, [math.cos(theta), math.sin(theta), 0.0, 1.0], atol=1e-6)


@pytest.mark.parametrize("theta", [0.3, -1.4])
def test_rotate_x_and_y_sign_convention(theta):
    c, s = math.cos(theta), math.sin(theta)
    np.testing.assert_allclose(rotate_x(theta).apply([0, 1, 0, 1]), [0, c, s, 1], atol=1e-6)
    np.testing.assert_allclose(rotate_y(theta).apply([0, 0, 1, 1]), [s, 0, c, 1], atol=1e-6)
    np.testing.assert_allclose(rotate_y(theta).apply([1, 0, 0, 1]), [c, 0, -s, 1], atol=1e-6)


@pytest.mark.parametrize("rot", [rotate_x, rotate_y, rotate_z])
@pytest.mark.parametrize("theta", [0.1, 0.77, 2.5, -3.0])
def test_rotation_then_inverse_is_identity(rot, theta):
    m = multiply(rot(theta), rot(-theta))
    np.testing.assert_allclose(m.data, identity().data, atol=1e-6)


def test_translate_moves_points_not_directions():
    m = translate(2.0, -3.0, 4.5)
    np.testing.assert_array_equal(m.apply([0, 0, 0, 1]), [2.0, -3.0, 4.5, 1.0])
    np.testing.assert_array_equal(m.apply([1.0, 2.0, 3.0, 0.0]), [1.0, 2.0, 3.0, 0.0])
    np.testing.assert_array_equal(m.data[12:15], [2.0, -3.0, 4.5])


def test_scale_is_uniform_and_leaves_w():
    m = scale(2.5)
    assert [m.element(i, i) for i in range(4)] == [2.5, 2.5, 2.5, 1.0]
    np.testing.assert_array_equal(m.apply([1, 2, 3, 1]), [2.5, 5.0, 7.5, 1.0])


def test_perspective_maps_near_and_far_planes():
    p = perspective(math.pi / 2, 1.0, 1.0, 2.0)
    assert _project(p, [0, 0, -1, 1])[2] == pytest.approx(-1.0)
    assert _project(p, [0, 0, -2, 1])[2] == pytest.approx(1.0)


def test_perspective_layout():
    p = perspective(math.pi / 3, 2.0, 0.1, 100.0)
    f = 1.0 / math.tan(math.pi / 6)
    assert p.element(0, 0) == pytest.approx(f / 2.0)
    assert p.element(1, 1) == pytest.approx(f)
    assert p.data[11] == -1.0
    assert p.data[15] == 0.0
    assert p.element(2, 3) == pytest.approx(-2 * 100.0 * 0.1 / 99.9)


def test_perspective_degenerate_input_is_not_checked():
    p = perspective(math.pi / 2, 1.0, 1.0, 1.0)
    assert not np.all(np.isfinite(p.data))


def test_mat4_is_immutable_value():
    m = translate(1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        m.data[0] = 5.0
    assert m == translate(1.0, 2.0, 3.0)
    assert hash(m) == hash(translate(1.0, 2.0, 3.0))
    assert len(m) == 16 and list(m)[12:15] == [1.0, 2.0, 3.0]


def test_mat4_rejects_wrong_size():
    with pytest.raises(ValueError):
        Mat4([1.0] * 9)
    with pytest.raises(ValueError):
        Mat4.from_rows([[1.0, 0.0], [0.0, 1.0]])


def test_from_rows_matches_column_major_storage():
    m = Mat4.from_rows([[1, 2, 3, 4],
                        [5, 6, 7, 8],
                        [9, 10, 11, 12],
                        [13, 14, 15, 16]])
    assert list(m)[:4] == [1.0, 5.0, 9.0, 13.0]
    np.testing.assert_array_equal(m.column(3), [4, 8, 12, 16])
    assert m.to_array()[1, 2] == 7.0


def test_matmul_operator():
    a, b = rotate_x(0.4), translate(0.0, 1.0, 0.0)
    assert a @ b == multiply(a, b)
    np.testing.assert_array_equal(b @ np.array([0.0, 0.0, 0.0, 1.0]), [0.0, 1.0, 0.0, 1.0])


def test_format_matrix_prints_rows():
    text = format_matrix(translate(1.0, 2.0, 3.0))
    lines = text.splitlines()
    assert len(lines) == 4
    assert lines[0].split() == ["1.00", "0.00", "0.00", "1.00"]
    assert lines[2].split() == ["0.00", "0.00", "1.00", "3.00"]
    assert str(translate(1.0, 2.0, 3.0)) == text
