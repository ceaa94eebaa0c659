"""
Celestial body catalog for the solar system model.

Each orbiting body contributes one gravity well to the curvature field.
The Sun is kept separately: it sits at the origin (a = 0), is a focus of
every orbit, never moves and carries its own mass coefficient.

ORBITS: stylized, not to scale.
  a      semi-major axis in plane units (the universe plane spans -30..30)
  e      eccentricity, 0 <= e < 1
  speed  angular speed coefficient; angle = t * speed * 0.5

MASS: dimensionless well depth before the precision scaling
  effective mass = mass * (0.5 + 0.5 * precision)

radius, color, atmosphere and has_ring are display-only and never read by
the field.

IMPORTANT: No unicode characters (Windows charmap constraint).
"""

import copy

from spacetime.constants import SUN_MASS

# Each body entry contains:
#   id: unique identifier
#   name: display name
#   radius: display radius (plane units)
#   color: display color (hex)
#   orbit: {"a", "e", "speed"}
#   mass: base gravity well depth
#   atmosphere: optional glow color (hex)
#   has_ring: optional, True for ringed bodies

BODIES = [
    {
        "id": "mercury",
        "name": "Mercury",
        "radius": 0.15,
        "color": "#A5A5A5",
        "orbit": {"a": 3.0, "e": 0.205, "speed": 1.5},
        "mass": 0.2,
    },
    {
        "id": "venus",
        "name": "Venus",
        "radius": 0.25,
        "color": "#E39C4E",
        "orbit": {"a": 4.5, "e": 0.007, "speed": 1.2},
        "atmosphere": "#ffcc99",
        "mass": 0.4,
    },
    {
        "id": "earth",
        "name": "Earth",
        "radius": 0.28,
        "color": "#4F4CB0",
        "orbit": {"a": 6.5, "e": 0.017, "speed": 1.0},
        "atmosphere": "#4facfe",
        "mass": 0.5,
    },
    {
        "id": "mars",
        "name": "Mars",
        "radius": 0.22,
        "color": "#C1440E",
        "orbit": {"a": 8.5, "e": 0.094, "speed": 0.8},
        "mass": 0.3,
    },
    {
        "id": "jupiter",
        "name": "Jupiter",
        "radius": 0.8,
        "color": "#C99039",
        "orbit": {"a": 12.0, "e": 0.049, "speed": 0.5},
        "mass": 1.2,
    },
    {
        "id": "saturn",
        "name": "Saturn",
        "radius": 0.7,
        "color": "#EAD6B8",
        "orbit": {"a": 16.0, "e": 0.056, "speed": 0.35},
        "has_ring": True,
        "mass": 1.0,
    },
]

SUN = {
    "id": "sun",
    "name": "Sun",
    "radius": 1.5,
    "color": "#FDB813",
    "orbit": {"a": 0.0, "e": 0.0, "speed": 0.0},
    "mass": SUN_MASS,
}


def validate_body(body):
    """
    Check a catalog entry's orbital elements.

    Parameters
    ----------
    body : dict
        Catalog entry with an "orbit" dict and a "mass".

    Raises
    ------
    ValueError
        If a < 0, e outside [0, 1), or mass < 0.
    """
    orbit = body.get("orbit") or {}
    a = orbit.get("a")
    e = orbit.get("e")
    if a is None or e is None or orbit.get("speed") is None:
        raise ValueError(
            "Body '{}' is missing orbital elements".format(body.get("id")))
    if a < 0:
        raise ValueError(
            "Body '{}' has negative semi-major axis {}".format(body["id"], a))
    if not 0.0 <= e < 1.0:
        raise ValueError(
            "Body '{}' has eccentricity {} outside [0, 1)".format(body["id"], e))
    if body.get("mass", 0) < 0:
        raise ValueError(
            "Body '{}' has negative mass".format(body["id"]))


def _validate_catalog():
    seen = set()
    for body in BODIES:
        validate_body(body)
        if body["orbit"]["a"] <= 0:
            raise ValueError(
                "Orbiting body '{}' must have a > 0".format(body["id"]))
        if body["id"] in seen:
            raise ValueError("Duplicate body id '{}'".format(body["id"]))
        seen.add(body["id"])
    validate_body(SUN)


_validate_catalog()


def get_orbiting_bodies():
    """Return a deep copy of the orbiting bodies in catalog order (Sun excluded)."""
    return copy.deepcopy(BODIES)


def get_all_bodies():
    """Return a deep copy of the catalog, Sun last."""
    return copy.deepcopy(BODIES + [SUN])


def get_body_by_id(body_id):
    """Return a copy of a single catalog entry (Sun included) or None."""
    if body_id == SUN["id"]:
        return copy.deepcopy(SUN)
    for body in BODIES:
        if body["id"] == body_id:
            return copy.deepcopy(body)
    return None
