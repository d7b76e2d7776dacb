import math

import pytest

from gfxkit.matrices import Mat4, det, transpose
from gfxkit.quat import (
    Quat,
    axis_to_quat,
    qexp,
    qlog,
    quat_to_matrix,
    slerp,
    trackball,
    unit_quat_to_matrix,
)
from gfxkit.vectors import Vec


def assert_quat_close(a, b, tol=1e-9):
    assert list(a) == pytest.approx(list(b), abs=tol)


def assert_mat_close(a, b, tol=1e-9):
    for ra, rb in zip(a, b):
        assert list(ra) == pytest.approx(list(rb), abs=tol)


def rotate(q, v):
    return (q * Quat(v, 0.0) * q.conjugate()).vector


SAMPLE = axis_to_quat(Vec(1.0, 2.0, -0.5), 0.9)
OTHER = axis_to_quat(Vec(-0.3, 0.4, 1.0), 1.7)


def test_default_is_identity():
    assert Quat() == Quat.ident()
    assert Quat.ident().scalar == 1.0


def test_identity_is_neutral_for_product():
    assert_quat_close(SAMPLE * Quat.ident(), SAMPLE)
    assert_quat_close(Quat.ident() * SAMPLE, SAMPLE)


def test_product_norm_is_multiplicative():
    a = Quat(1.0, -2.0, 0.5, 3.0)
    b = Quat(0.25, 4.0, -1.0, 2.0)
    assert (a * b).norm() == pytest.approx(a.norm() * b.norm())


def test_inverse_gives_identity():
    a = Quat(1.0, -2.0, 0.5, 3.0)
    assert_quat_close(a * a.inverse(), Quat.ident())


def test_axis_to_quat_is_unit():
    assert SAMPLE.norm() == pytest.approx(1.0)


def test_axis_to_quat_ignores_axis_length():
    assert_quat_close(axis_to_quat(Vec(0, 0, 5), 0.7), axis_to_quat(Vec(0, 0, 1), 0.7))


def test_exp_log_round_trip():
    assert_quat_close(qexp(qlog(SAMPLE)), SAMPLE)


def test_log_of_identity_is_zero():
    assert_quat_close(qlog(Quat()), Quat(Vec(0, 0, 0), 0.0))


def test_exp_of_zero_is_identity():
    assert_quat_close(qexp(Quat(Vec(0, 0, 0), 0.0)), Quat.ident())


def test_identity_gives_identity_matrix():
    assert_mat_close(unit_quat_to_matrix(Quat()), Mat4().identity())


def test_rotation_matrix_is_orthonormal():
    m = unit_quat_to_matrix(SAMPLE)
    assert_mat_close(m @ transpose(m), Mat4().identity())
    assert det(m) == pytest.approx(1.0)


def test_rotation_fixes_its_axis():
    axis = Vec(1.0, 2.0, -0.5)
    m = unit_quat_to_matrix(axis_to_quat(axis, 1.1))
    assert list(m @ axis) == pytest.approx(list(axis))


def test_matrix_matches_quaternion_rotation():
    v = Vec(0.3, -1.2, 2.0)
    m = unit_quat_to_matrix(SAMPLE)
    assert list(m @ v) == pytest.approx(list(rotate(SAMPLE, v)))


def test_general_matrix_is_scale_invariant():
    assert_mat_close(quat_to_matrix(SAMPLE * 3.0), unit_quat_to_matrix(SAMPLE))


def test_slerp_endpoints():
    assert_quat_close(slerp(SAMPLE, OTHER, 0.0), SAMPLE)
    assert_quat_close(slerp(SAMPLE, OTHER, 1.0), OTHER)


def test_slerp_midpoint_is_unit_and_equidistant():
    mid = slerp(SAMPLE, OTHER, 0.5)
    assert mid.norm() == pytest.approx(1.0)
    d1 = sum(a * b for a, b in zip(mid, SAMPLE))
    d2 = sum(a * b for a, b in zip(mid, OTHER))
    assert d1 == pytest.approx(d2)


def test_slerp_of_equal_quaternions_is_constant():
    assert_quat_close(slerp(SAMPLE, SAMPLE, 0.3), SAMPLE)


def test_slerp_of_opposite_quaternions_starts_at_start():
    assert_quat_close(slerp(SAMPLE, -SAMPLE, 0.0), SAMPLE)
    assert slerp(SAMPLE, -SAMPLE, 0.4).norm() == pytest.approx(1.0)


def test_trackball_without_motion_is_identity():
    assert trackball(0.2, 0.3, 0.2, 0.3) == Quat.ident()


def test_trackball_result_is_unit():
    assert trackball(0.1, 0.2, -0.4, 0.5).norm() == pytest.approx(1.0)
    assert trackball(0.9, 0.9, -0.9, -0.8).norm() == pytest.approx(1.0)


def test_trackball_reverse_drag_undoes_rotation():
    forward = trackball(0.1, 0.2, -0.4, 0.5)
    backward = trackball(-0.4, 0.5, 0.1, 0.2)
    product = forward * backward
    assert abs(product.scalar) == pytest.approx(1.0)
    assert list(product.vector) == pytest.approx([0.0, 0.0, 0.0], abs=1e-9)


def test_bad_construction_raises():
    with pytest.raises(TypeError):
        Quat(1.0, 2.0, 3.0)
    with pytest.raises(ZeroDivisionError):
        Quat(Vec(0, 0, 0), 0.0).inverse()
    assert math.isclose(Quat(3.0, 0.0, 4.0, 0.0).norm(), 5.0)