"""
Closed-form elliptical orbits with the Sun at a focus.

    x = a*cos(theta) - a*e
    y = a*sqrt(1 - e^2)*sin(theta)

theta advances linearly with time, theta = t * speed * 0.5. This is NOT
a Keplerian mean anomaly (there is no equal-areas correction); camera,
gravity wells and rendered bodies all use this same angle, so they stay
in lock-step.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from spacetime.constants import ORBIT_RATE


def ellipse_position(angle, a, e):
    """
    Position on an ellipse whose focus is pinned at the origin.

    Parameters
    ----------
    angle : float
        Orbit parameter theta in radians.
    a : float
        Semi-major axis (a >= 0, validated by the catalog).
    e : float
        Eccentricity (0 <= e < 1, validated by the catalog).

    Returns
    -------
    tuple of float
        (x, y) in plane coordinates.
    """
    b = a * math.sqrt(1.0 - e * e)
    c = a * e  # focal distance
    return (a * math.cos(angle) - c, b * math.sin(angle))


def orbit_angle(t, speed):
    """Orbit parameter at time t for a body with the given speed coefficient."""
    return t * speed * ORBIT_RATE


def body_position(body, t):
    """
    Position of a catalog body at time t.

    Parameters
    ----------
    body : dict
        Catalog entry with "orbit": {"a", "e", "speed"}.
    t : float
        Simulation time in seconds.

    Returns
    -------
    tuple of float
        (x, y) in plane coordinates.
    """
    orbit = body["orbit"]
    return ellipse_position(orbit_angle(t, orbit["speed"]), orbit["a"], orbit["e"])


def orbit_tangent(angle, a, e):
    """
    Unit tangent of the ellipse at the given orbit parameter.

    The derivative of ellipse_position with respect to theta is
    (-a*sin(theta), b*cos(theta)); it points in the direction of motion.
    Returns (0.0, 0.0) for a degenerate orbit (a == 0).
    """
    b = a * math.sqrt(1.0 - e * e)
    dx = -a * math.sin(angle)
    dy = b * math.cos(angle)
    norm = math.hypot(dx, dy)
    if norm == 0.0:
        return (0.0, 0.0)
    return (dx / norm, dy / norm)


def path_resolution(precision):
    """Number of orbit path segments for a precision in [0, 1]."""
    return int(math.floor(64 + precision * 128))


def orbit_path(a, e, num_points):
    """
    Sample a full orbit as a closed polyline.

    Parameters
    ----------
    a, e : float
        Orbital elements.
    num_points : int
        Number of segments. The returned list has num_points + 1 entries,
        the last one equal to the first (up to rounding).

    Returns
    -------
    list of tuple
        (x, y) samples, or [] for a == 0 (the Sun has no path).
    """
    if a == 0:
        return []
    num_points = max(int(num_points), 3)
    step = 2.0 * math.pi / num_points
    return [ellipse_position(i * step, a, e) for i in range(num_points + 1)]
