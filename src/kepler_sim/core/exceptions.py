class KeplerSimException(Exception):
    """Base class for errors raised by kepler_sim."""


class DomainError(KeplerSimException, ValueError):
    """Raised when an input lies outside the domain where a computation is defined."""


class SeriesDomainError(DomainError):
    """Raised when the near-parabolic series argument does not satisfy |x| < 1."""


class EccentricityDomainError(DomainError):
    """Raised for a negative eccentricity."""


class TrueAnomalyDomainError(DomainError):
    """Raised when a true anomaly lies outside [-pi, pi)."""
