"""
Curvature field, scalar CPU form.

    z(x, y, t) = metric(x, y; omega)
               + chaos(x, y, t * chaos_speed)      if chaos is enabled
               - sum_i m_i * exp(-d_i^2 * w_i)     if gravity is enabled

Each term is additive and toggles independently. This is the form the
camera rigs and overlay generators call at arbitrary points. The same
expression, vectorized, lives in spacetime.kernel (and as GLSL in
spacetime.shader); tests/test_parity.py holds the two together.

Total over its domain: non-finite x or y gives 0, a NaN sum gives 0.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

from spacetime.constants import (
    UNIVERSE_SCALE,
    EXAGGERATION,
    METRIC_SHAPE,
    CHAOS_CROSS_FREQ,
    CHAOS_CROSS_AMP,
    CHAOS_AXIS_FREQ,
    CHAOS_AXIS_PHASE,
    CHAOS_AXIS_AMP,
    CHAOS_RADIAL_FREQ,
    CHAOS_RADIAL_PHASE,
    CHAOS_RADIAL_AMP,
    metric_factor,
)
from spacetime.regime import regime_kind, OPEN, CLOSED
from spacetime import mass_sources


def metric_term(x, y, omega):
    """
    FLRW-analogy term: bowl for closed, saddle for open, exactly 0 when flat.

    The flat band [0.98, 1.02] is a dead zone, not an interpolation.
    """
    kind = regime_kind(omega)
    if kind == CLOSED:
        nx = x / UNIVERSE_SCALE
        ny = y / UNIVERSE_SCALE
        dist_sq = nx * nx + ny * ny
        return -metric_factor(omega) * (dist_sq * METRIC_SHAPE)
    if kind == OPEN:
        nx = x / UNIVERSE_SCALE
        ny = y / UNIVERSE_SCALE
        return metric_factor(omega) * (nx * nx - ny * ny) * METRIC_SHAPE
    return 0.0


# math.sin/cos raise on +/-inf where numpy and GLSL give NaN; match them.
def _sin(v):
    return math.sin(v) if math.isfinite(v) else math.nan


def _cos(v):
    return math.cos(v) if math.isfinite(v) else math.nan


def chaos_noise(x, y, tau):
    """Multi-layer sine noise before exaggeration (tau = t * chaos_speed)."""
    c = (_sin(x * CHAOS_CROSS_FREQ + tau)
         * _sin(y * CHAOS_CROSS_FREQ + tau) * CHAOS_CROSS_AMP)
    c += _sin(x * CHAOS_AXIS_FREQ - tau * CHAOS_AXIS_PHASE) * CHAOS_AXIS_AMP
    c += _cos(y * CHAOS_AXIS_FREQ + tau * CHAOS_AXIS_PHASE) * CHAOS_AXIS_AMP
    length = math.sqrt(x * x + y * y)
    c += (_sin(length * CHAOS_RADIAL_FREQ - tau * CHAOS_RADIAL_PHASE)
          * CHAOS_RADIAL_AMP)
    return c


def chaos_term(x, y, t, chaos_speed):
    return chaos_noise(x, y, t * chaos_speed) * EXAGGERATION


def gravity_term(x, y, table):
    """
    Sum of Gaussian wells (negative or 0).

    Sources with mass <= 0 are skipped, so a table built with gravity off
    contributes nothing.
    """
    z = 0.0
    positions = table.positions
    masses = table.masses
    widths = table.widths
    for i in range(len(table)):
        m = float(masses[i])
        if m > 0.0:
            dx = x - float(positions[i, 0])
            dy = y - float(positions[i, 1])
            d_sq = dx * dx + dy * dy
            z -= m * math.exp(-d_sq * float(widths[i]))
    return z


def height(x, y, t, params, table=None):
    """
    Surface height of the universe plane at (x, y) and time t.

    Parameters
    ----------
    x, y : float
        Plane coordinates.
    t : float
        Simulation time in seconds.
    params : SimulationParameters
        Frame parameters (already sanitized).
    table : MassSourceTable, optional
        The frame's mass sources. Computed from (t, params) if omitted;
        pass the frame's table to guarantee parity with the parallel
        evaluator.

    Returns
    -------
    float
        Height z. Never NaN.
    """
    if not (math.isfinite(x) and math.isfinite(y)):
        return 0.0

    z = metric_term(x, y, params.omega)

    if params.chaos_enabled:
        z += chaos_term(x, y, t, params.chaos_speed)

    if params.gravity_enabled:
        if table is None:
            # Orbit positions are undefined at a non-finite time
            if not math.isfinite(t):
                return 0.0
            table = mass_sources.snapshot(t, params)
        z += gravity_term(x, y, table)

    if math.isnan(z):
        return 0.0
    return z
