"""
Convergent series used by the near-parabolic form of Kepler's equation.

    S(x)  = sum_k (ecc - 1/(2k+3)) * x^k
    dS(x) = sum_k (ecc - 1/(2k+3)) * (2k+3) * x^k

Both converge for |x| < 1 and are summed until two successive partial sums
differ by less than ``atol``.
"""

from __future__ import annotations

from kepler_sim.core.constants import SERIES_ATOL
from kepler_sim.core.exceptions import SeriesDomainError


def check_series_argument(x: float) -> None:
    # NaN fails this too
    if not abs(x) < 1.0:
        raise SeriesDomainError(f"Series argument must satisfy |x| < 1. Got: {x}")


def _sum_series(ecc: float, x: float, atol: float, weighted: bool) -> float:
    check_series_argument(x)

    S = 0.0
    k = 0
    x_k = 1.0
    while True:
        S_old = S
        term = ecc - 1.0 / (2 * k + 3)
        if weighted:
            term *= 2 * k + 3
        S += term * x_k
        k += 1
        x_k *= x
        if abs(S - S_old) < atol:
            return S


def S_x(ecc: float, x: float, atol: float = SERIES_ATOL) -> float:
    """Value series S(x)."""
    return _sum_series(ecc, x, atol, weighted=False)


def dS_x_alt(ecc: float, x: float, atol: float = SERIES_ATOL) -> float:
    """Derivative-form series, used for d(M)/d(D) in the near-parabolic solver."""
    return _sum_series(ecc, x, atol, weighted=True)
