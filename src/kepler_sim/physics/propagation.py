"""
Two-body propagation by mean motion (Farnocchia et al. 2013).

Time since periapsis is the intermediate invariant: the current true anomaly
is turned into an elapsed time, the time of flight is added, and the sum is
turned back into a true anomaly. Inside the near-parabolic band the regime is
decided per call from the anomaly (or elapsed time), not from eccentricity
alone.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from kepler_sim.core.constants import NEAR_PARABOLIC_DELTA
from kepler_sim.core.exceptions import TrueAnomalyDomainError
from kepler_sim.core.frames import Vector3
from kepler_sim.physics.anomalies import (
    E_to_M,
    F_to_M,
    M_to_nu_in_regime,
    Regime,
    check_eccentricity,
    classify_eccentricity,
    nu_to_E,
    nu_to_F,
    nu_to_M_in_regime,
)
from kepler_sim.physics.elements import coe2rv, rv2coe

logger = logging.getLogger(__name__)


def mean_motion(regime: Regime, ecc: float, mu: float, q: float) -> float:
    """Mean motion matching the mean anomaly normalization of ``regime``."""
    if regime is Regime.STRONG_ELLIPTIC:
        return math.sqrt(mu * (1.0 - ecc) ** 3 / q ** 3)
    if regime is Regime.STRONG_HYPERBOLIC:
        return math.sqrt(mu * (ecc - 1.0) ** 3 / q ** 3)
    # parabolic and near parabolic
    return math.sqrt(mu / (2.0 * q ** 3))


def classify_anomaly(nu: float, ecc: float, delta: float = NEAR_PARABOLIC_DELTA) -> Regime:
    """
    Regime for a given true anomaly.

    Inside the band, a point far enough from periapsis is handled with the
    elliptic or hyperbolic formulation, because 1 - ecc*cos(E) (resp.
    ecc*cosh(F) - 1) is already at least ``delta`` there.
    """
    regime = classify_eccentricity(ecc, delta)

    if regime is Regime.NEAR_PARABOLIC_LOW:
        E = nu_to_E(nu, ecc)
        if delta <= 1.0 - ecc * math.cos(E):
            return Regime.STRONG_ELLIPTIC
    elif regime is Regime.NEAR_PARABOLIC_HIGH:
        F = nu_to_F(nu, ecc)
        if delta <= ecc * math.cosh(F) - 1.0:
            return Regime.STRONG_HYPERBOLIC

    return regime


def classify_elapsed_time(delta_t: float, ecc: float, mu: float = 1.0, q: float = 1.0,
                          delta: float = NEAR_PARABOLIC_DELTA) -> Regime:
    """
    Regime for a given time since periapsis.

    Inside the band the mean anomaly is first computed as if the orbit were
    strongly elliptic (hyperbolic) and compared with the mean anomaly of the
    band boundary, E_delta = acos((1 - delta)/ecc) or
    F_delta = acosh((1 + delta)/ecc).
    """
    regime = classify_eccentricity(ecc, delta)

    if regime is Regime.NEAR_PARABOLIC_LOW:
        E_delta = math.acos((1.0 - delta) / ecc)
        M = mean_motion(Regime.STRONG_ELLIPTIC, ecc, mu, q) * delta_t
        # abs(M) because E_delta is taken positive
        if E_to_M(E_delta, ecc) <= abs(M):
            return Regime.STRONG_ELLIPTIC
    elif regime is Regime.NEAR_PARABOLIC_HIGH:
        F_delta = math.acosh((1.0 + delta) / ecc)
        M = mean_motion(Regime.STRONG_HYPERBOLIC, ecc, mu, q) * delta_t
        if F_to_M(F_delta, ecc) <= abs(M):
            return Regime.STRONG_HYPERBOLIC

    return regime


def delta_t_from_nu(nu: float, ecc: float, mu: float = 1.0, q: float = 1.0,
                    delta: float = NEAR_PARABOLIC_DELTA) -> float:
    """
    Time elapsed since periapsis for a given true anomaly.

    Args:
        nu: True anomaly (rad), in [-pi, pi)
        ecc: Eccentricity
        mu: Gravitational parameter
        q: Periapsis distance
        delta: Width of the near-parabolic band

    Returns:
        Time since periapsis (negative before periapsis), or NaN when nu lies
        on or beyond the asymptote of a hyperbola.
    """
    check_eccentricity(ecc)
    if not (-math.pi <= nu < math.pi):
        raise TrueAnomalyDomainError(f"True anomaly must be in range [-pi, pi). Got: {nu}")

    if ecc > 1.0 and 1.0 + ecc * math.cos(nu) <= 0.0:
        logger.debug("True anomaly %r is never reached for ecc=%r", nu, ecc)
        return math.nan

    regime = classify_anomaly(nu, ecc, delta)
    M = nu_to_M_in_regime(nu, ecc, regime)
    n = mean_motion(regime, ecc, mu, q)

    return M / n


def nu_from_delta_t(delta_t: float, ecc: float, mu: float = 1.0, q: float = 1.0,
                    delta: float = NEAR_PARABOLIC_DELTA) -> float:
    """
    True anomaly for a given time elapsed since periapsis.

    Elliptic times spanning several revolutions are wrapped. The result is in
    [-pi, pi).
    """
    regime = classify_elapsed_time(delta_t, ecc, mu, q, delta)
    logger.debug("Elapsed time %r with ecc=%r solved as %s", delta_t, ecc, regime.name)
    M = mean_motion(regime, ecc, mu, q) * delta_t
    nu = M_to_nu_in_regime(M, ecc, regime)

    if nu >= math.pi:
        nu -= 2.0 * math.pi
    return nu


def farnocchia_coe(mu: float, p: float, ecc: float, inc: float, raan: float, argp: float,
                   nu: float, tof: float, delta: float = NEAR_PARABOLIC_DELTA) -> float:
    """
    True anomaly after a time of flight.

    Args:
        mu: Gravitational parameter (km^3/s^2)
        p: Semi-latus rectum (km)
        ecc: Eccentricity
        inc: Inclination (rad)
        raan: Right ascension of ascending node (rad)
        argp: Argument of periapsis (rad)
        nu: True anomaly (rad)
        tof: Time of flight (s), negative to propagate backward

    Returns:
        New true anomaly (rad) in [-pi, pi). inc, raan and argp do not change
        in two-body motion and are accepted only to keep the element set whole.
    """
    q = p / (1.0 + ecc)

    delta_t0 = delta_t_from_nu(nu, ecc, mu, q, delta)
    if math.isnan(delta_t0):
        return math.nan

    return nu_from_delta_t(delta_t0 + tof, ecc, mu, q, delta)


def farnocchia_rv(mu: float, r0: Vector3, v0: Vector3, tof: float,
                  delta: float = NEAR_PARABOLIC_DELTA) -> Tuple[Vector3, Vector3]:
    """
    Propagate a state vector by a time of flight.

    Returns:
        (r, v) after ``tof`` seconds
    """
    coe = rv2coe(mu, r0, v0)
    nu = farnocchia_coe(mu, coe.p, coe.ecc, coe.inc, coe.raan, coe.argp, coe.nu, tof, delta)
    return coe2rv(mu, coe.p, coe.ecc, coe.inc, coe.raan, coe.argp, nu)
