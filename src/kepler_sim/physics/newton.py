"""
Best-effort Newton-Raphson iteration shared by the Kepler equation solvers.

The solver never raises on non-convergence: after the iteration cap it returns
the last estimate it computed. Callers that care can ask for a NewtonResult
and inspect ``converged``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from kepler_sim.core.constants import NEWTON_MAX_ITER, NEWTON_TOL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewtonResult:
    """Outcome of a Newton-Raphson solve."""
    root: float  # last computed estimate
    iterations: int  # number of steps taken
    converged: bool  # True if |x_new - x| < tol was reached


def newton_raphson_result(x0: float,
                          residual: Callable[[float], float],
                          derivative: Callable[[float], float],
                          tol: float = NEWTON_TOL,
                          max_iter: int = NEWTON_MAX_ITER) -> NewtonResult:
    """
    Iterate x_new = x - residual(x) / derivative(x) from x0.

    Args:
        x0: Initial guess
        residual: f(x) - target
        derivative: f'(x)
        tol: stop once two successive estimates differ by less than this
        max_iter: iteration cap

    Returns:
        NewtonResult with the final estimate
    """
    x = x0
    x_new = x0
    for i in range(max_iter):
        step = residual(x) / derivative(x)
        x_new = x - step
        if abs(x_new - x) < tol:
            return NewtonResult(root=x_new, iterations=i + 1, converged=True)
        x = x_new

    logger.debug("Newton-Raphson did not converge in %d iterations (x0=%r, last=%r)", max_iter, x0, x_new)
    return NewtonResult(root=x_new, iterations=max_iter, converged=False)


def newton_raphson(x0: float,
                   residual: Callable[[float], float],
                   derivative: Callable[[float], float],
                   tol: float = NEWTON_TOL,
                   max_iter: int = NEWTON_MAX_ITER) -> float:
    """Same as newton_raphson_result but returns only the estimate."""
    return newton_raphson_result(x0, residual, derivative, tol, max_iter).root
