"""
GLSL source for the parallel curvature evaluator.

The shader text is generated, not hand-maintained: every constant is
formatted from spacetime.constants and the well array size from
MAX_MASS_SOURCES. spacetime.kernel is the numpy transcription of the
same source and is what the parity tests run.

    curvature_glsl()          uniforms + getChaosZ/getGravityZ/getCurvature
    universe_vertex_shader()  displaces the flat universe plane
    patch_vertex_shader(src)  curves any mesh in world space (planets,
                              rings, orbit tubes) by replacing the
                              '#include <project_vertex>' chunk

Plane coordinates map to world coordinates as plane (x, y) = world
(x, -z); height goes to world y.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from spacetime.constants import (
    UNIVERSE_SCALE,
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

PROJECT_VERTEX_CHUNK = "#include <project_vertex>"


def glsl_float(value):
    """Format a Python number as a GLSL float literal (always has a '.')."""
    text = repr(float(value))
    if "e" in text or "E" in text:
        mantissa, exponent = text.lower().split("e")
        if "." not in mantissa:
            mantissa += ".0"
        return "{}e{}".format(mantissa, exponent)
    return text


_CURVATURE_TEMPLATE = """
uniform float uTime;
uniform float uOmega;
uniform float uRegime;
uniform float uChaos;
uniform float uChaosSpeed;
uniform float uExaggeration;
uniform vec2 uGravPos[{n}];
uniform float uGravMass[{n}];
uniform float uGravWidth[{n}];

float getChaosZ(vec2 pos, float time) {{
    float z = sin(pos.x * {cross_freq} + time) * sin(pos.y * {cross_freq} + time) * {cross_amp};
    z += sin(pos.x * {axis_freq} - time * {axis_phase}) * {axis_amp};
    z += cos(pos.y * {axis_freq} + time * {axis_phase}) * {axis_amp};
    z += sin(length(pos) * {radial_freq} - time * {radial_phase}) * {radial_amp};
    return z;
}}

float getGravityZ(vec2 pos) {{
    float z = 0.0;
    for (int i = 0; i < {n}; i++) {{
        if (uGravMass[i] > 0.0) {{
            vec2 d = pos - uGravPos[i];
            z -= uGravMass[i] * exp(-dot(d, d) * uGravWidth[i]);
        }}
    }}
    return z;
}}

float getCurvature(vec2 pos) {{
    vec2 centered = pos / {scale};
    float z = 0.0;

    if (uRegime > 0.5) {{
        float factor = (uOmega - 1.0) * {gain} * uExaggeration;
        z -= factor * (dot(centered, centered) * {shape});
    }} else if (uRegime < -0.5) {{
        float factor = (1.0 - uOmega) * {gain} * uExaggeration;
        z += factor * (centered.x * centered.x - centered.y * centered.y) * {shape};
    }}

    if (uChaos > 0.5) {{
        float time = uTime * uChaosSpeed;
        z += getChaosZ(pos, time) * uExaggeration;
    }}

    z += getGravityZ(pos);
    return z;
}}
"""

_UNIVERSE_VERTEX_TEMPLATE = """{common}
varying vec2 vUv;
varying float vElevation;
varying vec3 vViewPosition;

void main() {{
    vUv = uv;
    vec3 pos = position;
    pos.z += getCurvature(pos.xy);
    vElevation = pos.z;

    vec4 modelPosition = modelMatrix * vec4(pos, 1.0);
    vec4 viewPosition = viewMatrix * modelPosition;
    vViewPosition = viewPosition.xyz;
    gl_Position = projectionMatrix * viewPosition;
}}
"""

_WORLD_DISPLACEMENT = """
vec4 curvedWorldPos = modelMatrix * vec4(transformed, 1.0);
vec2 universePlaneCoords = vec2(curvedWorldPos.x, -curvedWorldPos.z);
curvedWorldPos.y += getCurvature(universePlaneCoords);
vec4 mvPosition = viewMatrix * curvedWorldPos;
gl_Position = projectionMatrix * mvPosition;
"""


def curvature_glsl(capacity=MAX_MASS_SOURCES):
    """
    Shared GLSL chunk: uniform declarations and the curvature functions.

    Parameters
    ----------
    capacity : int, optional
        Well array size. Must equal MAX_MASS_SOURCES; the parameter exists
        so callers state the size they expect.

    Raises
    ------
    ValueError
        If capacity differs from the mass source table arity.
    """
    if capacity != MAX_MASS_SOURCES:
        raise ValueError(
            "Shader capacity {} does not match mass source table size {}".format(
                capacity, MAX_MASS_SOURCES))
    return _CURVATURE_TEMPLATE.format(
        n=capacity,
        scale=glsl_float(UNIVERSE_SCALE),
        gain=glsl_float(METRIC_GAIN),
        shape=glsl_float(METRIC_SHAPE),
        cross_freq=glsl_float(CHAOS_CROSS_FREQ),
        cross_amp=glsl_float(CHAOS_CROSS_AMP),
        axis_freq=glsl_float(CHAOS_AXIS_FREQ),
        axis_phase=glsl_float(CHAOS_AXIS_PHASE),
        axis_amp=glsl_float(CHAOS_AXIS_AMP),
        radial_freq=glsl_float(CHAOS_RADIAL_FREQ),
        radial_phase=glsl_float(CHAOS_RADIAL_PHASE),
        radial_amp=glsl_float(CHAOS_RADIAL_AMP),
    )


def universe_vertex_shader():
    """Vertex stage for the flat universe plane."""
    return _UNIVERSE_VERTEX_TEMPLATE.format(common=curvature_glsl())


def patch_vertex_shader(source):
    """
    Inject world-space curvature into an existing vertex shader.

    Parameters
    ----------
    source : str
        Vertex shader containing the '#include <project_vertex>' chunk.

    Returns
    -------
    str
        The shader with the curvature chunk prepended and the projection
        chunk replaced by world-space displacement.

    Raises
    ------
    ValueError
        If the projection chunk is missing.
    """
    if PROJECT_VERTEX_CHUNK not in source:
        raise ValueError(
            "Vertex shader has no '{}' chunk to patch".format(PROJECT_VERTEX_CHUNK))
    patched = source.replace(PROJECT_VERTEX_CHUNK, _WORLD_DISPLACEMENT, 1)
    return curvature_glsl() + "\n" + patched
