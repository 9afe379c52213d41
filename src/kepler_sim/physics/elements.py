"""
Conversion between state vectors (r, v) and classical orbital elements.

Elements use the semi-latus rectum p instead of the semi-major axis so that
parabolic orbits are representable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from kepler_sim.core.constants import ELEMENTS_TOL
from kepler_sim.core.frames import (
    Vector3,
    cross,
    dot,
    norm,
    perifocal_to_inertial,
    scale,
    sub,
    wrap_to_2pi,
    wrap_to_pi,
)
from kepler_sim.physics.anomalies import E_to_nu, F_to_nu


@dataclass(frozen=True)
class ClassicalElements:
    """
    Classical orbital elements (COEs) for any conic.

    Units:
        p: semi-latus rectum (km)
        ecc: eccentricity (ecc >= 0)
        inc: inclination in radians
        raan: right ascension of ascending node in radians
        argp: argument of periapsis in radians
        nu: true anomaly in radians
    """
    p: float
    ecc: float
    inc: float
    raan: float
    argp: float
    nu: float

    def __post_init__(self):
        if not (self.p > 0 and math.isfinite(self.p)):
            raise ValueError(f"Semi-latus rectum must be positive and finite. Got: {self.p}")
        if not (self.ecc >= 0 and math.isfinite(self.ecc)):
            raise ValueError(f"Eccentricity must be non-negative and finite. Got: {self.ecc}")
        if not (0.0 <= self.inc <= math.pi):
            raise ValueError(f"Inclination must be in range [0, π] radians. Got: {self.inc}")
        if not math.isfinite(self.raan):
            raise ValueError(f"RAAN must be finite. Got: {self.raan}")
        if not math.isfinite(self.argp):
            raise ValueError(f"Argument of periapsis must be finite. Got: {self.argp}")
        if not math.isfinite(self.nu):
            raise ValueError(f"True anomaly must be finite. Got: {self.nu}")

    def as_tuple(self) -> Tuple[float, float, float, float, float, float]:
        return (self.p, self.ecc, self.inc, self.raan, self.argp, self.nu)


def rv_pqw(mu: float, p: float, ecc: float, nu: float) -> Tuple[Vector3, Vector3]:
    """Position and velocity in the perifocal frame."""
    cos_nu = math.cos(nu)
    sin_nu = math.sin(nu)
    r_mag = p / (1.0 + ecc * cos_nu)
    v_scale = math.sqrt(mu / p)

    r_pqw: Vector3 = (r_mag * cos_nu, r_mag * sin_nu, 0.0)
    v_pqw: Vector3 = (-v_scale * sin_nu, v_scale * (ecc + cos_nu), 0.0)
    return r_pqw, v_pqw


def coe2rv(mu: float, p: float, ecc: float, inc: float, raan: float, argp: float,
           nu: float) -> Tuple[Vector3, Vector3]:
    """
    Convert classical orbital elements to inertial position and velocity.

    Args:
        mu: Gravitational parameter (km^3/s^2)
        p: Semi-latus rectum (km)
        ecc: Eccentricity
        inc: Inclination (rad)
        raan: Right ascension of ascending node (rad)
        argp: Argument of periapsis (rad)
        nu: True anomaly (rad)

    Returns:
        r (km), v (km/s)
    """
    r_pqw, v_pqw = rv_pqw(mu, p, ecc, nu)
    return perifocal_to_inertial(r_pqw, v_pqw, raan, inc, argp)


def rv2coe(mu: float, r: Vector3, v: Vector3, tol: float = ELEMENTS_TOL) -> ClassicalElements:
    """
    Convert inertial position and velocity to classical orbital elements.

    Circular orbits get argp = 0 and equatorial orbits get raan = 0; the true
    anomaly is then measured from the node or from the x axis instead.

    Args:
        mu: Gravitational parameter (km^3/s^2)
        r: Position vector (km)
        v: Velocity vector (km/s)
        tol: Threshold on eccentricity and inclination for the special cases

    Returns:
        ClassicalElements with nu in [-pi, pi)
    """
    r_mag = norm(r)
    h = cross(r, v)
    h_mag = norm(h)
    n = cross((0.0, 0.0, 1.0), h)
    e_vec = scale(sub(scale(r, dot(v, v) - mu / r_mag), scale(v, dot(r, v))), 1.0 / mu)

    ecc = norm(e_vec)
    p = dot(h, h) / mu
    inc = math.acos(max(-1.0, min(1.0, h[2] / h_mag)))

    circular = ecc < tol
    equatorial = abs(inc) < tol

    if equatorial and not circular:
        raan = 0.0
        argp = wrap_to_2pi(math.atan2(e_vec[1], e_vec[0]))
        nu = math.atan2(dot(h, cross(e_vec, r)) / h_mag, dot(r, e_vec))
    elif not equatorial and circular:
        raan = wrap_to_2pi(math.atan2(n[1], n[0]))
        argp = 0.0
        # argument of latitude
        nu = math.atan2(dot(r, cross(h, n)) / h_mag, dot(r, n))
    elif equatorial and circular:
        raan = 0.0
        argp = 0.0
        # true longitude
        nu = math.atan2(r[1], r[0])
    else:
        if ecc < 1.0:
            a = p / (1.0 - ecc ** 2)
            e_se = dot(r, v) / math.sqrt(mu * a)
            e_ce = r_mag * dot(v, v) / mu - 1.0
            nu = E_to_nu(math.atan2(e_se, e_ce), ecc)
        elif ecc > 1.0:
            a = p / (1.0 - ecc ** 2)
            e_sh = dot(r, v) / math.sqrt(-mu * a)
            e_ch = r_mag * dot(v, v) / mu - 1.0
            nu = F_to_nu(math.log((e_ch + e_sh) / (e_ch - e_sh)) / 2.0, ecc)
        else:
            nu = math.atan2(dot(h, cross(e_vec, r)) / h_mag, dot(r, e_vec))

        raan = wrap_to_2pi(math.atan2(n[1], n[0]))
        px = dot(r, n)
        py = dot(r, cross(h, n)) / h_mag
        argp = wrap_to_2pi(math.atan2(py, px) - nu)

    return ClassicalElements(p=p, ecc=ecc, inc=inc, raan=raan, argp=argp, nu=wrap_to_pi(nu))
