"""
Consumers of the curvature field: camera rigs, the Sun light, overlay
geometry and mesh displacement.

Point queries (camera, light, triangle overlay) go through the scalar CPU
evaluator; bulk geometry (surface mesh, orbit paths) goes through the
parallel form. Both read the same FrameSnapshot, so a camera riding the
surface sits exactly on the displaced mesh.

World coordinates follow the renderer's convention: the universe plane
is rotated -90 degrees about X, so plane (x, y, z) -> world (x, z, -y).

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math

import numpy as np

from data.bodies import get_body_by_id, get_orbiting_bodies
from spacetime.orbit import (
    ellipse_position,
    orbit_angle,
    orbit_tangent,
    orbit_path,
    path_resolution,
)

# Overview camera: distance = BASE / zoom
OVERVIEW_BASE_DISTANCE = 18.0
ZOOM_MIN = 0.2
ZOOM_MAX = 3.0

# Geodesic triangle drawn on the surface
TRIANGLE_VERTICES = ((0.0, 3.0), (-3.0, -2.0), (3.0, -2.0))
TRIANGLE_MAX_SEGMENTS = 150
OVERLAY_LIFT = 0.1

# Wireframe pyramid (open four-sided cone) curved in world space by the
# patched vertex shader; only its tessellation depends on precision.
PYRAMID_POSITION = (5.0, -5.0)
PYRAMID_RADIUS = 2.0
PYRAMID_HEIGHT = 3.0
PYRAMID_RADIAL_SEGMENTS = 4

# Universe plane mesh
PLANE_SIZE = 60.0
MESH_MIN_SEGMENTS = 64
MESH_MAX_SEGMENTS = 256


def to_world(x, y, z):
    """Plane (x, y) with height z -> world (x, y, z) tuple."""
    return (x, z, -y)


def overview_camera_distance(zoom):
    """
    Camera distance from the target for the free-orbit overview camera.

    Non-finite zoom falls back to 1.0; finite zoom is clamped to
    [0.2, 3.0].
    """
    zoom = float(zoom)
    if not math.isfinite(zoom):
        zoom = 1.0
    zoom = min(max(zoom, ZOOM_MIN), ZOOM_MAX)
    return OVERVIEW_BASE_DISTANCE / zoom


def earth_view_camera(frame, body_id="earth", height_offset=0.5,
                      look_ahead=1.0):
    """
    Camera riding a body along its orbit, just above the surface.

    The camera sits at the body's plane position, lifted to the CPU
    surface height plus height_offset, and looks along the orbit tangent
    at the surface height look_ahead units further on, so it pitches
    with the slope.

    Parameters
    ----------
    frame : FrameSnapshot
    body_id : str, optional
        Orbiting catalog body to ride (default "earth").
    height_offset : float, optional
    look_ahead : float, optional

    Returns
    -------
    dict or None
        {"position": (x, y, z), "target": (x, y, z), "tangent": (tx, ty)}
        in world coordinates, or None if a height came back non-finite.

    Raises
    ------
    ValueError
        If body_id is not an orbiting catalog body.
    """
    body = get_body_by_id(body_id)
    if body is None or body["orbit"]["a"] <= 0:
        raise ValueError("Unknown orbiting body '{}'".format(body_id))

    orbit = body["orbit"]
    angle = orbit_angle(frame.t, orbit["speed"])
    x, y = ellipse_position(angle, orbit["a"], orbit["e"])
    z = frame.height(x, y)

    tx, ty = orbit_tangent(angle, orbit["a"], orbit["e"])
    next_x = x + tx * look_ahead
    next_y = y + ty * look_ahead
    next_z = frame.height(next_x, next_y)

    if not (math.isfinite(z) and math.isfinite(next_z)):
        return None

    return {
        "position": to_world(x, y, z + height_offset),
        "target": to_world(next_x, next_y, next_z + height_offset),
        "tangent": (tx, ty),
    }


def sun_light_position(frame):
    """
    World position of the Sun's point light, riding the surface at the origin.

    Returns None if the height came back non-finite.
    """
    z = frame.height(0.0, 0.0)
    if not math.isfinite(z):
        return None
    return to_world(0.0, 0.0, z)


def triangle_segments(precision):
    """Segments per triangle edge for a precision in [0, 1]."""
    return min(int(math.floor(30 + precision * 70)), TRIANGLE_MAX_SEGMENTS)


def triangle_overlay(frame, vertices=TRIANGLE_VERTICES):
    """
    Geodesic triangle polyline draped over the surface.

    Each edge is sampled linearly in the plane and lifted to the CPU
    surface height plus a small offset so the line is not z-fighting the
    mesh. The polyline is closed by repeating the first vertex. Samples
    with a non-finite coordinate or height are dropped.

    Returns
    -------
    list of tuple
        (x, y, z) plane-space points.
    """
    segments = triangle_segments(frame.params.precision)
    points = []
    n = len(vertices)
    for k in range(n):
        sx, sy = vertices[k]
        ex, ey = vertices[(k + 1) % n]
        for i in range(segments):
            s = i / segments
            x = sx + (ex - sx) * s
            y = sy + (ey - sy) * s
            z = frame.height(x, y)
            if math.isfinite(x) and math.isfinite(y) and math.isfinite(z):
                points.append((x, y, z + OVERLAY_LIFT))

    x0, y0 = vertices[0]
    z0 = frame.height(x0, y0)
    if math.isfinite(z0):
        points.append((x0, y0, z0 + OVERLAY_LIFT))
    return points


def pyramid_segments(precision):
    """Height segments of the pyramid overlay: 10 at precision 0, 50 at 1."""
    return int(math.floor(10 + precision * 40))


def pyramid_overlay(frame):
    """Geometry description of the pyramid overlay for one frame."""
    return {
        "position": list(PYRAMID_POSITION),
        "radius": PYRAMID_RADIUS,
        "height": PYRAMID_HEIGHT,
        "radial_segments": PYRAMID_RADIAL_SEGMENTS,
        "height_segments": pyramid_segments(frame.params.precision),
    }


def orbit_overlays(frame):
    """
    Orbit paths for every orbiting body, draped with the parallel kernel.

    Returns
    -------
    dict
        body id -> {"x": [...], "y": [...], "z": [...]}
    """
    num_points = path_resolution(frame.params.precision)
    out = {}
    for body in get_orbiting_bodies():
        path = orbit_path(body["orbit"]["a"], body["orbit"]["e"], num_points)
        xs = np.array([p[0] for p in path])
        ys = np.array([p[1] for p in path])
        zs = frame.displace(xs, ys)
        out[body["id"]] = {
            "x": xs.tolist(),
            "y": ys.tolist(),
            "z": zs.tolist(),
        }
    return out


def mesh_resolution(precision):
    """Plane mesh segments per side: 64 at precision 0, 256 at 1."""
    return int(MESH_MIN_SEGMENTS
               + round(precision * (MESH_MAX_SEGMENTS - MESH_MIN_SEGMENTS)))


def surface_mesh(frame, size=PLANE_SIZE, segments=None):
    """
    Square plane grid centred on the origin, displaced by the parallel form.

    Parameters
    ----------
    frame : FrameSnapshot
    size : float, optional
        Side length in plane units (default 60).
    segments : int, optional
        Segments per side; defaults to mesh_resolution(precision). Capped
        at 256, minimum 1.

    Returns
    -------
    tuple of numpy.ndarray
        (X, Y, Z), each of shape (segments + 1, segments + 1).
    """
    if segments is None:
        segments = mesh_resolution(frame.params.precision)
    segments = max(1, min(int(segments), MESH_MAX_SEGMENTS))
    half = float(size) / 2.0
    axis = np.linspace(-half, half, segments + 1)
    X, Y = np.meshgrid(axis, axis)
    Z = frame.displace(X, Y)
    return X, Y, Z
