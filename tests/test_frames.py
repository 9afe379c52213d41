"""
Tests for vector helpers, angle wrapping and the perifocal rotation.
"""
import math
import pytest

from kepler_sim.core.frames import (
    rot1, rot3,
    dot, cross, add, sub, scale, norm,
    modulo, wrap_to_pi, wrap_to_2pi,
    perifocal_to_inertial,
)


class TestVectorOperations:
    def test_dot_product(self):
        a = (1.0, 2.0, 3.0)
        b = (4.0, 5.0, 6.0)
        assert dot(a, b) == 32.0

    def test_cross_product(self):
        assert cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == (0.0, 0.0, 1.0)
        assert cross((0.0, 1.0, 0.0), (1.0, 0.0, 0.0)) == (0.0, 0.0, -1.0)

    def test_add_sub_scale(self):
        a = (5.0, 7.0, 9.0)
        b = (2.0, 3.0, 4.0)
        assert add(a, b) == (7.0, 10.0, 13.0)
        assert sub(a, b) == (3.0, 4.0, 5.0)
        assert scale(b, 2.0) == (4.0, 6.0, 8.0)

    def test_norm(self):
        assert norm((3.0, 4.0, 0.0)) == 5.0
        assert norm((1.0, 0.0, 0.0)) == 1.0


class TestRotations:
    def test_rot3_90_degrees(self):
        result = rot3(math.pi / 2, (1.0, 0.0, 0.0))
        assert abs(result[0]) < 1e-10
        assert abs(result[1] - 1.0) < 1e-10
        assert abs(result[2]) < 1e-10

    def test_rot1_90_degrees(self):
        result = rot1(math.pi / 2, (0.0, 1.0, 0.0))
        assert abs(result[0]) < 1e-10
        assert abs(result[1]) < 1e-10
        assert abs(result[2] - 1.0) < 1e-10

    def test_identity(self):
        v = (1.0, 2.0, 3.0)
        assert rot1(0.0, v) == v
        assert rot3(0.0, v) == v


class TestAngleWrapping:
    def test_modulo_is_non_negative(self):
        assert modulo(-1.0, 3.0) == 2.0
        assert modulo(4.0, 3.0) == 1.0
        assert 0.0 <= modulo(-1e-20, 2 * math.pi) < 2 * math.pi

    def test_wrap_to_pi_range(self):
        for angle in [-10.0, -math.pi, -1.0, 0.0, 1.0, math.pi, 27.0]:
            wrapped = wrap_to_pi(angle)
            assert -math.pi <= wrapped < math.pi
            assert math.isclose(math.cos(wrapped), math.cos(angle), abs_tol=1e-12)
            assert math.isclose(math.sin(wrapped), math.sin(angle), abs_tol=1e-12)

    def test_wrap_to_pi_maps_pi_to_minus_pi(self):
        assert wrap_to_pi(math.pi) == -math.pi

    def test_wrap_to_2pi(self):
        assert math.isclose(wrap_to_2pi(-math.pi / 2), 1.5 * math.pi)
        assert wrap_to_2pi(0.5) == 0.5


class TestPerifocalToInertial:
    def test_zero_angles_is_identity(self):
        r = (7000.0, 100.0, 0.0)
        v = (0.1, 7.5, 0.0)
        r_out, v_out = perifocal_to_inertial(r, v, 0.0, 0.0, 0.0)
        assert r_out == r
        assert v_out == v

    def test_argument_of_periapsis_rotates_in_plane(self):
        r_out, _v = perifocal_to_inertial((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), 0.0, 0.0, math.pi / 2)
        assert abs(r_out[0]) < 1e-12
        assert abs(r_out[1] - 1.0) < 1e-12

    def test_polar_orbit_velocity_points_up(self):
        # inc = 90 deg, raan = 0: perifocal Q axis maps to +Z
        _r, v_out = perifocal_to_inertial((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), 0.0, math.pi / 2, 0.0)
        assert abs(v_out[0]) < 1e-12
        assert abs(v_out[1]) < 1e-12
        assert abs(v_out[2] - 1.0) < 1e-12

    def test_preserves_length(self):
        r = (6000.0, -2000.0, 0.0)
        v = (1.0, 6.0, 0.0)
        r_out, v_out = perifocal_to_inertial(r, v, 1.2, 0.7, -2.3)
        assert abs(norm(r_out) - norm(r)) < 1e-9
        assert abs(norm(v_out) - norm(v)) < 1e-12
