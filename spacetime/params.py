"""
SimulationParameters: the per-frame parameter snapshot.

The UI (or an API request) builds one of these between frames; both
evaluators read the same instance for the whole frame. Non-finite
omega and chaos speed are replaced here, once, so the CPU evaluator and
the uniform block handed to the parallel evaluator can never disagree
about the fallback.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math

from spacetime.constants import (
    DEFAULT_OMEGA,
    DEFAULT_CHAOS_SPEED,
    DEFAULT_PRECISION,
    MASS_SCALE_BASE,
    MASS_SCALE_PRECISION,
)

log = logging.getLogger(__name__)


def _finite_or(value, default, name):
    value = float(value)
    if math.isfinite(value):
        return value
    log.debug("Non-finite %s=%r replaced with %s", name, value, default)
    return default


class SimulationParameters:
    """
    User-tunable parameters of the curvature field.

    Treat instances as read-only: use replace() to derive a new snapshot.

    Parameters
    ----------
    omega : float
        Density parameter. Meaningful in [0.5, 1.5]; within 0.02 of 1.0 is
        flat. Non-finite values become 1.0.
    chaos_enabled : bool
        Enables the time-driven chaos term.
    chaos_speed : float
        Chaos time multiplier (> 0). Non-finite values become 1.0.
    gravity_enabled : bool
        Enables the gravity well term.
    precision : float
        Clamped to [0, 1]. Scales mesh resolution and well depth.
        Non-finite values become 0.5.
    """

    def __init__(self, omega=DEFAULT_OMEGA, chaos_enabled=False,
                 chaos_speed=DEFAULT_CHAOS_SPEED, gravity_enabled=False,
                 precision=DEFAULT_PRECISION):
        self.omega = _finite_or(omega, DEFAULT_OMEGA, "omega")
        self.chaos_enabled = bool(chaos_enabled)
        self.chaos_speed = _finite_or(chaos_speed, DEFAULT_CHAOS_SPEED,
                                      "chaos_speed")
        self.gravity_enabled = bool(gravity_enabled)
        precision = _finite_or(precision, DEFAULT_PRECISION, "precision")
        self.precision = min(max(precision, 0.0), 1.0)

    def mass_scale(self):
        """Well depth multiplier: 0.5 at precision 0, 1.0 at precision 1."""
        return MASS_SCALE_BASE + self.precision * MASS_SCALE_PRECISION

    def replace(self, **changes):
        """Return a new snapshot with the given fields changed."""
        values = self.to_dict()
        unknown = set(changes) - set(values)
        if unknown:
            raise ValueError(
                "Unknown parameter(s): {}".format(", ".join(sorted(unknown))))
        values.update(changes)
        return SimulationParameters(**values)

    def to_dict(self):
        return {
            "omega": self.omega,
            "chaos_enabled": self.chaos_enabled,
            "chaos_speed": self.chaos_speed,
            "gravity_enabled": self.gravity_enabled,
            "precision": self.precision,
        }

    @classmethod
    def from_dict(cls, data):
        """
        Build parameters from a (possibly partial) dict.

        Missing keys take their defaults. Unknown keys are ignored.

        Raises
        ------
        ValueError
            If a numeric field cannot be converted to float, or a toggle
            is not a boolean (0 and 1 are accepted).
        """
        data = data or {}
        kwargs = {}
        for key in ("omega", "chaos_speed", "precision"):
            if key in data and data[key] is not None:
                try:
                    kwargs[key] = float(data[key])
                except (TypeError, ValueError):
                    raise ValueError("{} must be a number".format(key))
        for key in ("chaos_enabled", "gravity_enabled"):
            if key in data and data[key] is not None:
                value = data[key]
                if isinstance(value, bool):
                    kwargs[key] = value
                elif isinstance(value, (int, float)) and value in (0, 1):
                    kwargs[key] = bool(value)
                else:
                    raise ValueError("{} must be true or false".format(key))
        return cls(**kwargs)

    def __eq__(self, other):
        if not isinstance(other, SimulationParameters):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return ("SimulationParameters(omega={omega!r}, chaos_enabled="
                "{chaos_enabled!r}, chaos_speed={chaos_speed!r}, "
                "gravity_enabled={gravity_enabled!r}, precision="
                "{precision!r})".format(**self.to_dict()))
