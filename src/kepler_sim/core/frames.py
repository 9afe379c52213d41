from __future__ import annotations

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]


def modulo(x: float, y: float) -> float:
    """Mathematical modulo: result lies in [0, y) for y > 0."""
    result = x % y
    # float rounding can land exactly on y for tiny negative x
    if result == y:
        return 0.0
    return result


def wrap_to_pi(angle_rad: float) -> float:
    """Wrap angle to [-pi, pi)."""
    two_pi = 2.0 * math.pi
    return modulo(angle_rad + math.pi, two_pi) - math.pi


def wrap_to_2pi(angle_rad: float) -> float:
    """Wrap angle to [0, 2pi)."""
    return modulo(angle_rad, 2.0 * math.pi)


def rot3(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (c * x - s * y, s * x + c * y, z)


def rot1(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (x, c * y - s * z, s * y + c * z)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0],
    )


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])


def scale(v: Vector3, scalar: float) -> Vector3:
    return (v[0] * scalar, v[1] * scalar, v[2] * scalar)


def norm(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


def perifocal_to_inertial(r_pqw: Vector3, v_pqw: Vector3, raan_rad: float, inc_rad: float, argp_rad: float) -> Tuple[Vector3, Vector3]:
    """
    Convert position and velocity from the perifocal (PQW) frame to the inertial frame.

    Args:
        r_pqw: Position vector in PQW frame
        v_pqw: Velocity vector in PQW frame
        raan_rad: Right ascension of ascending node (radians)
        inc_rad: Inclination (radians)
        argp_rad: Argument of periapsis (radians)

    Returns:
        (r, v): Position and velocity in the inertial frame
    """
    # Active rotation R3(raan) * R1(inc) * R3(argp): argument of periapsis first
    r_temp = rot3(argp_rad, r_pqw)
    v_temp = rot3(argp_rad, v_pqw)

    r_temp = rot1(inc_rad, r_temp)
    v_temp = rot1(inc_rad, v_temp)

    r = rot3(raan_rad, r_temp)
    v = rot3(raan_rad, v_temp)

    return r, v
