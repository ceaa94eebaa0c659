"""
Geometry regime of the universe plane from the density parameter.

    omega > 1.02  -> closed (spherical), triangle angles sum > 180
    omega < 0.98  -> open (hyperbolic),  triangle angles sum < 180
    otherwise     -> flat (euclidean),   triangle angles sum = 180

regime_kind() is also what the metric term of the curvature field
branches on, so the classifier and the surface cannot disagree about
which side of a threshold a given omega is on.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from spacetime.constants import (
    DEFAULT_OMEGA,
    OMEGA_CLOSED_THRESHOLD,
    OMEGA_OPEN_THRESHOLD,
)

OPEN = "open"
FLAT = "flat"
CLOSED = "closed"

REGIMES = {
    OPEN: {
        "label": "Open (Hyperbolic)",
        "color_hint": "#ef4444",
        "angle_sum": "< 180",
        "sign": -1,
    },
    FLAT: {
        "label": "Flat (Euclidean)",
        "color_hint": "#10b981",
        "angle_sum": "= 180",
        "sign": 0,
    },
    CLOSED: {
        "label": "Closed (Spherical)",
        "color_hint": "#3b82f6",
        "angle_sum": "> 180",
        "sign": 1,
    },
}


def regime_kind(omega):
    """Return OPEN, FLAT or CLOSED for a (finite) omega."""
    if omega > OMEGA_CLOSED_THRESHOLD:
        return CLOSED
    if omega < OMEGA_OPEN_THRESHOLD:
        return OPEN
    return FLAT


def classify_regime(omega):
    """
    Classify a density parameter.

    Parameters
    ----------
    omega : float
        Density parameter. Non-finite values are read as 1.0 (flat).

    Returns
    -------
    dict
        kind, label, color_hint, angle_sum (ASCII comparison string),
        angle_sum_sign (-1, 0, 1) and the omega actually classified.
    """
    omega = float(omega)
    if not math.isfinite(omega):
        omega = DEFAULT_OMEGA
    kind = regime_kind(omega)
    info = REGIMES[kind]
    return {
        "kind": kind,
        "label": info["label"],
        "color_hint": info["color_hint"],
        "angle_sum": info["angle_sum"],
        "angle_sum_sign": info["sign"],
        "omega": omega,
    }
