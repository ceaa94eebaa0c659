"""
MassSourceTable: per-frame snapshot of every gravitating body.

The table has a fixed arity for the life of the process: one entry per
orbiting catalog body, in catalog order, then the Sun last. The parallel
evaluator uploads these arrays as fixed-size uniforms, so the table is
never resized. With gravity disabled every mass is 0 but the entries
stay in place.

Both evaluators in a frame must read the same table object; that is
what keeps their positions and masses bit-for-bit identical.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numpy as np

from data.bodies import get_orbiting_bodies, SUN
from spacetime.constants import GRAVITY_WELL_WIDTH, SUN_GRAVITY_WIDTH
from spacetime.orbit import body_position

# Orbiting bodies + the Sun. Fixed at import; never changes at runtime.
MAX_MASS_SOURCES = len(get_orbiting_bodies()) + 1


class MassSource:
    """One gravity well: position, effective mass and Gaussian width."""

    def __init__(self, body_id, x, y, mass, width):
        self.body_id = body_id
        self.x = x
        self.y = y
        self.mass = mass
        self.width = width

    def to_dict(self):
        return {
            "id": self.body_id,
            "x": self.x,
            "y": self.y,
            "mass": self.mass,
            "width": self.width,
        }


class MassSourceTable:
    """
    Fixed-size arrays of well positions, masses and widths.

    Parameters
    ----------
    body_ids : list of str
        Source identifiers, Sun last.
    positions : array-like, shape (MAX_MASS_SOURCES, 2)
    masses : array-like, shape (MAX_MASS_SOURCES,)
    widths : array-like, shape (MAX_MASS_SOURCES,)

    Raises
    ------
    ValueError
        If the arrays do not have exactly MAX_MASS_SOURCES entries.
    """

    def __init__(self, body_ids, positions, masses, widths):
        positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        masses = np.array(masses, dtype=np.float64).reshape(-1)
        widths = np.array(widths, dtype=np.float64).reshape(-1)
        for name, n in (("body_ids", len(body_ids)),
                        ("positions", positions.shape[0]),
                        ("masses", masses.shape[0]),
                        ("widths", widths.shape[0])):
            if n != MAX_MASS_SOURCES:
                raise ValueError(
                    "MassSourceTable {} has {} entries, expected {}".format(
                        name, n, MAX_MASS_SOURCES))
        for arr in (positions, masses, widths):
            arr.flags.writeable = False
        self.body_ids = tuple(body_ids)
        self.positions = positions
        self.masses = masses
        self.widths = widths

    def __len__(self):
        return MAX_MASS_SOURCES

    def sources(self):
        """Return the table as a list of MassSource, Sun last."""
        return [
            MassSource(self.body_ids[i],
                       float(self.positions[i, 0]),
                       float(self.positions[i, 1]),
                       float(self.masses[i]),
                       float(self.widths[i]))
            for i in range(MAX_MASS_SOURCES)
        ]

    def total_mass(self):
        return float(self.masses.sum())

    def to_dict(self):
        return {"sources": [s.to_dict() for s in self.sources()]}


def snapshot(time, params, bodies=None):
    """
    Compute the mass source table for one frame.

    Parameters
    ----------
    time : float
        Simulation time in seconds.
    params : SimulationParameters
        Frame parameters (gravity toggle and precision are read).
    bodies : list of dict, optional
        Orbiting bodies; defaults to the catalog. Must have exactly
        MAX_MASS_SOURCES - 1 entries.

    Returns
    -------
    MassSourceTable

    Raises
    ------
    ValueError
        If the body list does not match the fixed table arity.
    """
    if bodies is None:
        bodies = get_orbiting_bodies()
    if len(bodies) != MAX_MASS_SOURCES - 1:
        raise ValueError(
            "Expected {} orbiting bodies, got {}".format(
                MAX_MASS_SOURCES - 1, len(bodies)))

    scale = params.mass_scale() if params.gravity_enabled else 0.0

    body_ids = []
    positions = []
    masses = []
    widths = []
    for body in bodies:
        body_ids.append(body["id"])
        positions.append(body_position(body, time))
        masses.append(body["mass"] * scale)
        widths.append(GRAVITY_WELL_WIDTH)

    body_ids.append(SUN["id"])
    positions.append((0.0, 0.0))
    masses.append(SUN["mass"] * scale)
    widths.append(SUN_GRAVITY_WIDTH)

    return MassSourceTable(body_ids, positions, masses, widths)
