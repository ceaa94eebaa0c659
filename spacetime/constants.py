"""
Shared constants for the curvature field.

Every evaluator of the field reads its numbers from this module: the
scalar CPU form (spacetime.curvature), the vectorized reference of the
GPU expression (spacetime.kernel), the generated GLSL source
(spacetime.shader) and the regime classifier (spacetime.regime). A value
changed here changes in all four places at once.

IMPORTANT: No unicode characters allowed in this file (Windows charmap constraint).
"""

# Plane coordinates are divided by this before the metric term.
# The visible universe plane spans roughly -30..30.
UNIVERSE_SCALE = 10.0

# Visual exaggeration applied to the metric and chaos terms.
EXAGGERATION = 2.0

# Density parameter thresholds. Omega strictly above CLOSED is spherical,
# strictly below OPEN is hyperbolic, the closed band between is flat.
OMEGA_CLOSED_THRESHOLD = 1.02
OMEGA_OPEN_THRESHOLD = 0.98

# Metric term: factor = |omega - 1| * METRIC_GAIN * E, shape scaled by
# METRIC_SHAPE (distSq for closed, nx^2 - ny^2 for open).
METRIC_GAIN = 2.0
METRIC_SHAPE = 2.0

# Chaos term layers: sin(x*0.5 + tau) * sin(y*0.5 + tau) * 0.5, then
# sin(x*1.5 - tau*0.5) * 0.25, cos(y*1.5 + tau*0.5) * 0.25 and a radial
# ripple sin(len*k - tau*2) * 0.1.
CHAOS_CROSS_FREQ = 0.5
CHAOS_CROSS_AMP = 0.5
CHAOS_AXIS_FREQ = 1.5
CHAOS_AXIS_PHASE = 0.5
CHAOS_AXIS_AMP = 0.25
# Radial ripple frequency on the raw (unscaled) distance from the origin.
# One value for every evaluator; see DESIGN.md for the 0.3 / 3.0 decision.
CHAOS_RADIAL_FREQ = 0.3
CHAOS_RADIAL_PHASE = 2.0
CHAOS_RADIAL_AMP = 0.1

# Gaussian well width coefficients: contribution = m * exp(-d^2 * width)
GRAVITY_WELL_WIDTH = 0.1   # planets
SUN_GRAVITY_WIDTH = 0.05   # sun (broader well)

# Sun base mass coefficient (sits at the origin, never orbits)
SUN_MASS = 1.5

# Effective mass = base * (MASS_SCALE_BASE + MASS_SCALE_PRECISION * precision)
MASS_SCALE_BASE = 0.5
MASS_SCALE_PRECISION = 0.5

# Orbit angle = t * speed * ORBIT_RATE (linear rate, no Kepler correction)
ORBIT_RATE = 0.5

# Fallbacks for non-finite parameters
DEFAULT_OMEGA = 1.0
DEFAULT_CHAOS_SPEED = 1.0
DEFAULT_PRECISION = 0.5

# Tolerance the CPU and parallel evaluators must agree to (float64)
PARITY_TOLERANCE = 1e-4


def metric_factor(omega):
    """Amplitude of the metric term for a given omega (sign handled by caller)."""
    return abs(omega - 1.0) * METRIC_GAIN * EXAGGERATION


def constants_dict():
    """Return the shared field constants as a JSON-serializable dict."""
    return {
        "UNIVERSE_SCALE": UNIVERSE_SCALE,
        "EXAGGERATION": EXAGGERATION,
        "OMEGA_CLOSED_THRESHOLD": OMEGA_CLOSED_THRESHOLD,
        "OMEGA_OPEN_THRESHOLD": OMEGA_OPEN_THRESHOLD,
        "METRIC_GAIN": METRIC_GAIN,
        "METRIC_SHAPE": METRIC_SHAPE,
        "CHAOS_RADIAL_FREQ": CHAOS_RADIAL_FREQ,
        "GRAVITY_WELL_WIDTH": GRAVITY_WELL_WIDTH,
        "SUN_GRAVITY_WIDTH": SUN_GRAVITY_WIDTH,
        "SUN_MASS": SUN_MASS,
        "ORBIT_RATE": ORBIT_RATE,
        "PARITY_TOLERANCE": PARITY_TOLERANCE,
    }
