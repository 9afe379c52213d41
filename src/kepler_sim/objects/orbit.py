from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from kepler_sim.core.frames import Vector3, wrap_to_pi
from kepler_sim.physics.elements import ClassicalElements, coe2rv, rv2coe
from kepler_sim.physics.propagation import farnocchia_coe


@dataclass
class Orbit:
    """
    A two-body orbit: classical elements at an epoch around a central body.

    Propagation only advances the true anomaly and the epoch; the shape and
    orientation stay fixed.

    Units:
        mu: gravitational parameter in km^3/s^2
        epoch: time of the stored true anomaly in seconds
    """
    mu: float
    elements: ClassicalElements
    epoch: float = 0.0

    def __post_init__(self):
        if not (self.mu > 0 and math.isfinite(self.mu)):
            raise ValueError(f"Gravitational parameter must be positive and finite. Got: {self.mu}")
        if not math.isfinite(self.epoch):
            raise ValueError(f"Epoch must be finite. Got: {self.epoch}")
        # apoapsis given as nu = pi is stored as -pi
        if not (-math.pi <= self.elements.nu < math.pi):
            self.elements = replace(self.elements, nu=wrap_to_pi(self.elements.nu))

    @classmethod
    def from_state_vectors(cls, mu: float, r: Vector3, v: Vector3, epoch: float = 0.0) -> "Orbit":
        return cls(mu=mu, elements=rv2coe(mu, r, v), epoch=epoch)

    @classmethod
    def from_classical_elements(cls, mu: float, p: float, ecc: float, inc: float, raan: float,
                                argp: float, nu: float, epoch: float = 0.0) -> "Orbit":
        elements = ClassicalElements(p=p, ecc=ecc, inc=inc, raan=raan, argp=argp, nu=nu)
        return cls(mu=mu, elements=elements, epoch=epoch)

    @property
    def coe(self) -> ClassicalElements:
        return self.elements

    @property
    def ecc(self) -> float:
        return self.elements.ecc

    @property
    def nu(self) -> float:
        return self.elements.nu

    @property
    def a(self) -> float:
        """Semi-major axis in km (negative for hyperbolas, infinite for a parabola)."""
        if self.ecc == 1.0:
            return math.inf
        return self.elements.p / (1.0 - self.ecc ** 2)

    @property
    def period(self) -> float:
        """Orbital period in seconds, elliptic orbits only."""
        if self.ecc >= 1.0:
            raise ValueError(f"Period is only defined for elliptic orbits (ecc < 1). Got: {self.ecc}")
        return 2.0 * math.pi * math.sqrt(self.a ** 3 / self.mu)

    @property
    def radius(self) -> float:
        """Current distance from the focus in km."""
        return self.elements.p / (1.0 + self.ecc * math.cos(self.nu))

    @property
    def rv(self) -> Tuple[Vector3, Vector3]:
        return self.sample_at_angle(self.nu)

    def _nu_after(self, tof: float) -> float:
        p, ecc, inc, raan, argp, nu = self.elements.as_tuple()
        return farnocchia_coe(self.mu, p, ecc, inc, raan, argp, wrap_to_pi(nu), tof)

    def propagate_for(self, tof: float) -> None:
        """Advance the orbit by ``tof`` seconds (negative goes backward)."""
        self.elements = replace(self.elements, nu=self._nu_after(tof))
        self.epoch += tof

    def propagate_to(self, epoch: float) -> None:
        self.propagate_for(epoch - self.epoch)

    def sample_at_epoch(self, epoch: float) -> Tuple[Vector3, Vector3]:
        """State vectors at ``epoch`` without changing the orbit."""
        return self.sample_at_angle(self._nu_after(epoch - self.epoch))

    def sample_at_angle(self, nu: float) -> Tuple[Vector3, Vector3]:
        """State vectors at true anomaly ``nu``."""
        p, ecc, inc, raan, argp, _nu = self.elements.as_tuple()
        return coe2rv(self.mu, p, ecc, inc, raan, argp, nu)

    def ephem(self, samples: int = 100, tof: Optional[float] = None,
              start: Optional[float] = None) -> List[Tuple[float, Vector3, Vector3]]:
        """
        Sample the orbit at evenly spaced epochs.

        Args:
            samples: number of samples
            tof: time span covered by the samples (s); defaults to one period
            start: epoch of the first sample (s); defaults to the orbit epoch

        Returns:
            List of (t, r, v)
        """
        if samples <= 0:
            raise ValueError(f"Number of samples must be positive. Got: {samples}")
        if tof is None:
            if self.ecc >= 1.0:
                raise ValueError("tof must be given for non-elliptic orbits.")
            tof = self.period
        if start is None:
            start = self.epoch

        dt = tof / samples
        out: List[Tuple[float, Vector3, Vector3]] = []
        for i in range(samples):
            t = start + i * dt
            r, v = self.sample_at_epoch(t)
            out.append((t, r, v))
        return out
