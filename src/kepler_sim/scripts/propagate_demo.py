import math

from kepler_sim.core.constants import MU_EARTH_KM3_S2
from kepler_sim.objects.orbit import Orbit
from kepler_sim.visualization.plotly_viewer import render_orbit_scene


def deg(x): return x * math.pi / 180.0


# Elliptic orbit: a = 26600 km, e = 0.74 (Molniya-like)
molniya = Orbit.from_classical_elements(
    mu=MU_EARTH_KM3_S2,
    p=26600.0 * (1.0 - 0.74 ** 2),
    ecc=0.74,
    inc=deg(63.4),
    raan=deg(30.0),
    argp=deg(270.0),
    nu=0.0,
)

# Near-parabolic flyby, inside the band around ecc = 1
flyby = Orbit.from_classical_elements(
    mu=MU_EARTH_KM3_S2,
    p=2.0 * 8000.0,
    ecc=1.005,
    inc=deg(20.0),
    raan=deg(10.0),
    argp=deg(0.0),
    nu=deg(-90.0),
)

print("Molniya period [h]:", molniya.period / 3600.0)
for t in [0, 3600, 7200, 10800]:
    r, v = molniya.sample_at_epoch(float(t))
    print(t, r)

tracks = {
    "Molniya": molniya.ephem(samples=200),
    "Flyby": flyby.ephem(samples=200, tof=6 * 3600.0),
}

out = render_orbit_scene(tracks, out_html="out/propagate_demo.html")
print("Wrote:", out)
