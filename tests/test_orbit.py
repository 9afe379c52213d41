import math
import pytest

from kepler_sim.core.constants import MU_EARTH_KM3_S2
from kepler_sim.core.frames import norm
from kepler_sim.objects.orbit import Orbit

# (mu, p, ecc, inc, raan, argp, nu)
ELLIPTICAL = (1.1368823e11, 2.9328214e8, 0.325, 0.002443461, 3.410897, 5.2838098, 0.94806285)


def make_orbit():
    return Orbit.from_classical_elements(*ELLIPTICAL)


def make_hyperbola():
    return Orbit.from_classical_elements(MU_EARTH_KM3_S2, 20000.0, 1.8, 0.3, 0.2, 0.1, 0.0)


def test_orbit_from_classical_elements():
    orbit = make_orbit()
    assert isinstance(orbit, Orbit)
    assert orbit.epoch == 0.0
    assert orbit.coe.as_tuple() == ELLIPTICAL[1:]


def test_orbit_from_state_vectors():
    r, v = make_orbit().rv
    orbit = Orbit.from_state_vectors(ELLIPTICAL[0], r, v)
    assert orbit.coe.p == pytest.approx(ELLIPTICAL[1], rel=1e-9)
    assert orbit.ecc == pytest.approx(ELLIPTICAL[2], abs=1e-9)
    assert orbit.nu == pytest.approx(ELLIPTICAL[6], abs=1e-9)


def test_semi_major_axis():
    assert make_orbit().a == pytest.approx(3.2791853e8, rel=1e-6)


def test_semi_major_axis_of_hyperbola_is_negative():
    assert make_hyperbola().a < 0


def test_semi_major_axis_of_parabola_is_infinite():
    orbit = Orbit.from_classical_elements(MU_EARTH_KM3_S2, 14000.0, 1.0, 0.0, 0.0, 0.0, 0.0)
    assert orbit.a == math.inf


def test_period():
    assert make_orbit().period == pytest.approx(1.10655e8, rel=1e-5)


def test_period_undefined_for_hyperbola():
    with pytest.raises(ValueError, match="only defined for elliptic"):
        make_hyperbola().period


def test_radius_at_periapsis():
    orbit = Orbit.from_classical_elements(MU_EARTH_KM3_S2, 7700.0, 0.1, 0.5, 0.0, 0.0, 0.0)
    assert orbit.radius == pytest.approx(7000.0)
    assert norm(orbit.rv[0]) == pytest.approx(7000.0)


def test_orbit_at_apoapsis_propagates():
    orbit = Orbit.from_classical_elements(MU_EARTH_KM3_S2, 7700.0, 0.1, 0.5, 0.0, 0.0, math.pi)
    assert orbit.nu == -math.pi
    assert orbit.radius == pytest.approx(7000.0 * 1.1 / 0.9)

    orbit.propagate_for(60.0)
    assert -math.pi < orbit.nu < -3.0
    assert len(orbit.ephem(samples=5)) == 5


def test_orbit_wraps_true_anomaly_outside_range():
    orbit = Orbit.from_classical_elements(MU_EARTH_KM3_S2, 7700.0, 0.1, 0.5, 0.0, 0.0, 4.0)
    assert orbit.nu == pytest.approx(4.0 - 2 * math.pi)
    r, _v = orbit.sample_at_epoch(120.0)
    assert norm(r) > 0


def test_propagate_for_half_period():
    orbit = make_orbit()
    half = orbit.period / 2
    orbit.propagate_for(half)
    assert orbit.epoch == pytest.approx(half, rel=1e-7)
    assert orbit.nu != pytest.approx(ELLIPTICAL[6], abs=1e-3)


def test_propagate_for_full_period_returns_to_start():
    orbit = make_orbit()
    orbit.propagate_for(orbit.period)
    assert orbit.nu == pytest.approx(ELLIPTICAL[6], abs=1e-7)


def test_propagate_to_epoch():
    orbit = make_orbit()
    orbit.propagate_to(1.0e6)
    assert orbit.epoch == 1.0e6
    orbit.propagate_to(0.0)
    assert orbit.epoch == 0.0
    assert orbit.nu == pytest.approx(ELLIPTICAL[6], abs=1e-7)


def test_sample_at_epoch_leaves_orbit_unchanged():
    orbit = make_orbit()
    before = orbit.coe
    r, v = orbit.sample_at_epoch(5.0e6)
    assert orbit.coe is before
    assert orbit.epoch == 0.0
    assert norm(r) > 0 and norm(v) > 0


def test_ephem_samples():
    orbit = make_orbit()
    samples = orbit.ephem(10)
    assert len(samples) == 10

    t0, r0, _v0 = samples[0]
    assert t0 == 0.0
    assert norm(r0) == pytest.approx(orbit.radius, rel=1e-6)

    times = [t for (t, _r, _v) in samples]
    assert times == sorted(times)
    assert times[1] == pytest.approx(orbit.period / 10)


def test_ephem_with_explicit_start_and_span():
    samples = make_hyperbola().ephem(samples=4, tof=400.0, start=-200.0)
    assert [t for (t, _r, _v) in samples] == pytest.approx([-200.0, -100.0, 0.0, 100.0])


def test_ephem_needs_tof_for_hyperbola():
    with pytest.raises(ValueError, match="tof must be given"):
        make_hyperbola().ephem()


def test_ephem_rejects_non_positive_samples():
    with pytest.raises(ValueError, match="Number of samples must be positive"):
        make_orbit().ephem(0)
