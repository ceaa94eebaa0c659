"""
Curvature field, parallel form.

This module is a line-for-line numpy transcription of the GLSL that
spacetime.shader generates: the same uniform names, the same branch
structure, the same fixed-size loop over mass sources. It serves two
purposes:

  1. Server-side mesh displacement (spacetime.consumers.surface_mesh).
  2. A CPU-runnable reference of the GPU expression, so the parity
     tests can compare it against the scalar evaluator in
     spacetime.curvature on thousands of samples.

The uniform block is built once per frame by build_uniforms() from the
same (t, params, MassSourceTable) the scalar evaluator receives.

Pass dtype=np.float32 to emulate GPU single precision.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import numpy as np

from spacetime.constants import (
    UNIVERSE_SCALE,
    EXAGGERATION,
    METRIC_GAIN,
    METRIC_SHAPE,
    CHAOS_CROSS_FREQ,
    CHAOS_CROSS_AMP,
    CHAOS_AXIS_FREQ,
    CHAOS_AXIS_PHASE,
    CHAOS_AXIS_AMP,
    CHAOS_RADIAL_FREQ,
    CHAOS_RADIAL_PHASE,
    CHAOS_RADIAL_AMP,
)
from spacetime.mass_sources import MAX_MASS_SOURCES
from spacetime.regime import REGIMES, regime_kind

# Uniform names, in declaration order of the generated GLSL
UNIFORM_NAMES = (
    "uTime",
    "uOmega",
    "uRegime",
    "uChaos",
    "uChaosSpeed",
    "uExaggeration",
    "uGravPos",
    "uGravMass",
    "uGravWidth",
)


def build_uniforms(t, params, table):
    """
    Build the per-frame uniform block.

    The regime branch is decided here, on the host, with the same
    regime_kind() the scalar evaluator and the classifier use, and sent
    as uRegime (-1 open, 0 flat, 1 closed). The GPU never re-compares
    omega against the thresholds in its own precision.

    Parameters
    ----------
    t : float
        Simulation time in seconds.
    params : SimulationParameters
        Frame parameters (already sanitized).
    table : MassSourceTable
        The frame's mass sources. Masses are already 0 when gravity is
        disabled.

    Returns
    -------
    dict
        Uniform name -> value. Array uniforms are the table's read-only
        arrays, not copies.
    """
    return {
        "uTime": float(t),
        "uOmega": params.omega,
        "uRegime": float(REGIMES[regime_kind(params.omega)]["sign"]),
        "uChaos": 1.0 if params.chaos_enabled else 0.0,
        "uChaosSpeed": params.chaos_speed,
        "uExaggeration": EXAGGERATION,
        "uGravPos": table.positions,
        "uGravMass": table.masses,
        "uGravWidth": table.widths,
    }


def to_json_uniforms(uniforms):
    """Return a JSON-serializable copy of a uniform block."""
    out = {}
    for name in UNIFORM_NAMES:
        value = uniforms[name]
        if isinstance(value, np.ndarray):
            out[name] = value.tolist()
        else:
            out[name] = float(value)
    return out


def get_chaos_z(x, y, time):
    """GLSL getChaosZ(pos, time)."""
    z = (np.sin(x * CHAOS_CROSS_FREQ + time)
         * np.sin(y * CHAOS_CROSS_FREQ + time) * CHAOS_CROSS_AMP)
    z = z + np.sin(x * CHAOS_AXIS_FREQ - time * CHAOS_AXIS_PHASE) * CHAOS_AXIS_AMP
    z = z + np.cos(y * CHAOS_AXIS_FREQ + time * CHAOS_AXIS_PHASE) * CHAOS_AXIS_AMP
    length = np.sqrt(x * x + y * y)
    z = z + (np.sin(length * CHAOS_RADIAL_FREQ - time * CHAOS_RADIAL_PHASE)
             * CHAOS_RADIAL_AMP)
    return z


def get_gravity_z(x, y, u, dtype=np.float64):
    """GLSL getGravityZ(pos): fixed-size loop over MAX_MASS_SOURCES wells."""
    pos = np.asarray(u["uGravPos"], dtype=dtype)
    mass = np.asarray(u["uGravMass"], dtype=dtype)
    width = np.asarray(u["uGravWidth"], dtype=dtype)
    z = np.zeros_like(x)
    for i in range(MAX_MASS_SOURCES):
        if mass[i] > 0.0:
            dx = x - pos[i, 0]
            dy = y - pos[i, 1]
            z = z - mass[i] * np.exp(-(dx * dx + dy * dy) * width[i])
    return z


def get_curvature(x, y, u, dtype=np.float64):
    """GLSL getCurvature(pos): metric + chaos + gravity wells."""
    omega = dtype(u["uOmega"])
    regime = u["uRegime"]
    exaggeration = dtype(u["uExaggeration"])

    cx = x / UNIVERSE_SCALE
    cy = y / UNIVERSE_SCALE
    z = np.zeros_like(x)

    if regime > 0.5:
        factor = (omega - 1.0) * METRIC_GAIN * exaggeration
        z = z - factor * ((cx * cx + cy * cy) * METRIC_SHAPE)
    elif regime < -0.5:
        factor = (1.0 - omega) * METRIC_GAIN * exaggeration
        z = z + factor * (cx * cx - cy * cy) * METRIC_SHAPE

    if u["uChaos"] > 0.5:
        time = dtype(u["uTime"]) * dtype(u["uChaosSpeed"])
        z = z + get_chaos_z(x, y, time) * exaggeration

    z = z + get_gravity_z(x, y, u, dtype)
    return z


def displace(xs, ys, uniforms, dtype=np.float64):
    """
    Evaluate the curvature field for many points at once.

    Parameters
    ----------
    xs, ys : array-like
        Plane coordinates; broadcast against each other.
    uniforms : dict
        Uniform block from build_uniforms().
    dtype : numpy float type, optional
        Working precision (np.float32 emulates the GPU).

    Returns
    -------
    numpy.ndarray
        Heights with the broadcast shape of xs and ys. Non-finite
        inputs and NaN results are 0.
    """
    x, y = np.broadcast_arrays(np.asarray(xs, dtype=dtype),
                               np.asarray(ys, dtype=dtype))
    with np.errstate(invalid="ignore", over="ignore"):
        finite = np.isfinite(x) & np.isfinite(y)
        # Zero out bad inputs before the math so they cannot poison the sum
        xf = np.where(finite, x, 0.0).astype(dtype)
        yf = np.where(finite, y, 0.0).astype(dtype)
        z = get_curvature(xf, yf, uniforms, dtype)
    return np.where(finite & ~np.isnan(z), z, 0.0).astype(dtype)
