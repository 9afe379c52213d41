"""
Conversions between mean (M), eccentric (E), hyperbolic (F), parabolic (D)
and true (nu) anomalies.

Closed-form conversions are one-liners; the inverses of the Kepler equations
use the shared Newton-Raphson solver. Near ecc = 1 the elliptic and hyperbolic
forms lose precision, so a band of width ``delta`` around it is handled with
the parabolic anomaly and the series S(x).
"""

from __future__ import annotations

import math
from enum import Enum

from kepler_sim.core.constants import (
    NEAR_PARABOLIC_DELTA,
    NEAR_PARABOLIC_NEWTON_TOL,
    NEWTON_MAX_ITER,
    NEWTON_TOL,
)
from kepler_sim.core.exceptions import DomainError, EccentricityDomainError
from kepler_sim.core.frames import wrap_to_pi
from kepler_sim.physics.newton import newton_raphson
from kepler_sim.physics.series import S_x, check_series_argument, dS_x_alt


class Regime(Enum):
    """Conic regime used to pick the anomaly formulation."""
    STRONG_ELLIPTIC = "strong_elliptic"
    NEAR_PARABOLIC_LOW = "near_parabolic_low"
    PARABOLIC = "parabolic"
    NEAR_PARABOLIC_HIGH = "near_parabolic_high"
    STRONG_HYPERBOLIC = "strong_hyperbolic"

    @property
    def is_near_parabolic(self) -> bool:
        return self in (Regime.NEAR_PARABOLIC_LOW, Regime.NEAR_PARABOLIC_HIGH)


def check_eccentricity(ecc: float) -> None:
    if not ecc >= 0.0:
        raise EccentricityDomainError(f"Eccentricity must be in [0, inf). Got: {ecc}")


def classify_eccentricity(ecc: float, delta: float = NEAR_PARABOLIC_DELTA) -> Regime:
    """
    Classify a conic by eccentricity alone.

        ecc < 1 - delta        strong elliptic
        1 - delta <= ecc < 1   near parabolic (low)
        ecc == 1               parabolic
        1 < ecc <= 1 + delta   near parabolic (high)
        ecc > 1 + delta        strong hyperbolic
    """
    check_eccentricity(ecc)
    if ecc < 1.0 - delta:
        return Regime.STRONG_ELLIPTIC
    if ecc < 1.0:
        return Regime.NEAR_PARABOLIC_LOW
    if ecc == 1.0:
        return Regime.PARABOLIC
    if ecc <= 1.0 + delta:
        return Regime.NEAR_PARABOLIC_HIGH
    return Regime.STRONG_HYPERBOLIC


# Elliptic

def E_to_M(E: float, ecc: float) -> float:
    """Kepler's equation: M = E - ecc*sin(E)."""
    return E - ecc * math.sin(E)


def M_to_E(M: float, ecc: float) -> float:
    """Eccentric anomaly from mean anomaly (Newton-Raphson, tol 1e-7)."""
    E0 = M + ecc if M >= 0 else M - ecc
    return newton_raphson(
        E0,
        lambda E: E_to_M(E, ecc) - M,
        lambda E: 1.0 - ecc * math.cos(E),
        tol=NEWTON_TOL,
        max_iter=NEWTON_MAX_ITER,
    )


def E_to_nu(E: float, ecc: float) -> float:
    return 2.0 * math.atan(math.sqrt((1.0 + ecc) / (1.0 - ecc)) * math.tan(E / 2.0))


def nu_to_E(nu: float, ecc: float) -> float:
    return 2.0 * math.atan(math.sqrt((1.0 - ecc) / (1.0 + ecc)) * math.tan(nu / 2.0))


# Hyperbolic

def F_to_M(F: float, ecc: float) -> float:
    """Hyperbolic Kepler equation: M = ecc*sinh(F) - F."""
    return ecc * math.sinh(F) - F


def M_to_F(M: float, ecc: float) -> float:
    """Hyperbolic anomaly from mean anomaly (Newton-Raphson, tol 1e-7)."""
    return newton_raphson(
        math.asinh(M / ecc),
        lambda F: F_to_M(F, ecc) - M,
        lambda F: ecc * math.cosh(F) - 1.0,
        tol=NEWTON_TOL,
        max_iter=NEWTON_MAX_ITER,
    )


def F_to_nu(F: float, ecc: float) -> float:
    return 2.0 * math.atan(math.sqrt((ecc + 1.0) / (ecc - 1.0)) * math.tanh(F / 2.0))


def nu_to_F(nu: float, ecc: float) -> float:
    """
    Hyperbolic anomaly from true anomaly.

    acosh only gives |F|; the sign follows nu so this inverts F_to_nu on
    both legs of the hyperbola.
    """
    cos_nu = math.cos(nu)
    if 1.0 + ecc * cos_nu <= 0.0:
        raise DomainError(f"True anomaly {nu} lies beyond the asymptote for ecc={ecc}")
    cosh_F = max((ecc + cos_nu) / (1.0 + ecc * cos_nu), 1.0)
    return math.copysign(math.acosh(cosh_F), nu)


# Parabolic

def D_to_M(D: float) -> float:
    """Barker's equation: M = D + D^3/3."""
    return D + D ** 3 / 3.0


def M_to_D(M: float) -> float:
    """Closed-form solution of Barker's equation."""
    # evaluated on |M|: B + sqrt(1 + B^2) cancels for large negative B
    B = 3.0 * abs(M) / 2.0
    A = (B + math.sqrt(1.0 + B ** 2)) ** (2.0 / 3.0)
    return math.copysign(2.0 * A * B / (1.0 + A + A ** 2), M)


def D_to_nu(D: float) -> float:
    return 2.0 * math.atan(D)


def nu_to_D(nu: float) -> float:
    return math.tan(nu / 2.0)


# Near parabolic

def _series_argument(D: float, ecc: float) -> float:
    x = (ecc - 1.0) / (ecc + 1.0) * D ** 2
    check_series_argument(x)
    return x


def D_to_M_near_parabolic(D: float, ecc: float) -> float:
    """Mean anomaly from parabolic anomaly for ecc close to 1."""
    x = _series_argument(D, ecc)
    S = S_x(ecc, x)
    return math.sqrt(2.0 / (1.0 + ecc)) * D + math.sqrt(2.0 / (1.0 + ecc) ** 3) * D ** 3 * S


def _kepler_equation_prime_near_parabolic(D: float, ecc: float) -> float:
    x = _series_argument(D, ecc)
    dS = dS_x_alt(ecc, x)
    return math.sqrt(2.0 / (1.0 + ecc)) + math.sqrt(2.0 / (1.0 + ecc) ** 3) * D ** 2 * dS


def M_to_D_near_parabolic(M: float, ecc: float) -> float:
    """Parabolic anomaly from mean anomaly for ecc close to 1 (Newton-Raphson, tol 1.48e-8)."""
    return newton_raphson(
        M_to_D(M),
        lambda D: D_to_M_near_parabolic(D, ecc) - M,
        lambda D: _kepler_equation_prime_near_parabolic(D, ecc),
        tol=NEAR_PARABOLIC_NEWTON_TOL,
        max_iter=NEWTON_MAX_ITER,
    )


# Regime dispatch

def M_to_nu_in_regime(M: float, ecc: float, regime: Regime) -> float:
    """True anomaly from mean anomaly using the formulation of ``regime``."""
    if regime is Regime.STRONG_ELLIPTIC:
        # M may span several revolutions
        return E_to_nu(M_to_E(wrap_to_pi(M), ecc), ecc)
    if regime is Regime.PARABOLIC:
        return D_to_nu(M_to_D(M))
    if regime.is_near_parabolic:
        return D_to_nu(M_to_D_near_parabolic(M, ecc))
    return F_to_nu(M_to_F(M, ecc), ecc)


def nu_to_M_in_regime(nu: float, ecc: float, regime: Regime) -> float:
    """Mean anomaly from true anomaly using the formulation of ``regime``."""
    if regime is Regime.STRONG_ELLIPTIC:
        return E_to_M(nu_to_E(nu, ecc), ecc)
    if regime is Regime.PARABOLIC:
        return D_to_M(nu_to_D(nu))
    if regime.is_near_parabolic:
        return D_to_M_near_parabolic(nu_to_D(nu), ecc)
    return F_to_M(nu_to_F(nu, ecc), ecc)


def M_to_nu(M: float, ecc: float, delta: float = NEAR_PARABOLIC_DELTA) -> float:
    """
    True anomaly from mean anomaly for any eccentricity.

    Inside the near-parabolic band M is the parabolic-normalized mean anomaly,
    sqrt(mu / (2 q^3)) * t, not the elliptic or hyperbolic one.
    """
    return M_to_nu_in_regime(M, ecc, classify_eccentricity(ecc, delta))


def nu_to_M(nu: float, ecc: float, delta: float = NEAR_PARABOLIC_DELTA) -> float:
    """Mean anomaly from true anomaly for any eccentricity."""
    return nu_to_M_in_regime(nu, ecc, classify_eccentricity(ecc, delta))
