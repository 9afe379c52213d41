from __future__ import annotations

# Newtonian constant of gravitation in m^3 kg^-1 s^-2 (CODATA 2018)
GRAVITATIONAL_CONSTANT: float = 6.67430e-11

# Astronomical unit in km (IAU 2012)
KM_PER_AU: float = 1.495978707e8

# Earth gravitational parameter (mu) in km^3/s^2 (WGS-84 standard value)
MU_EARTH_KM3_S2: float = 398600.4418

# Sun gravitational parameter in km^3/s^2
MU_SUN_KM3_S2: float = 1.32712440018e11

# Mean Earth radius in km (approx), used for plotting the central body
R_EARTH_KM: float = 6378.137

# Width of the near-parabolic band around ecc = 1
NEAR_PARABOLIC_DELTA: float = 1e-2

# Newton-Raphson settings
NEWTON_MAX_ITER: int = 50
NEWTON_TOL: float = 1e-7
NEAR_PARABOLIC_NEWTON_TOL: float = 1.48e-8

# Absolute tolerance between successive partial sums of S(x)
SERIES_ATOL: float = 1e-12

# Eccentricity / inclination threshold for circular and equatorial special cases
ELEMENTS_TOL: float = 1e-8
