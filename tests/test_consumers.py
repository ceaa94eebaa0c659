"""
Tests for the field consumers: camera rigs, the Sun light, overlays and
the plane mesh.

The camera, the light and the triangle overlay query the CPU evaluator;
the mesh and orbit paths use the parallel form. Everything must land on
the same surface.
"""

import math

import numpy as np
import pytest

from spacetime.consumers import (
    to_world,
    overview_camera_distance,
    earth_view_camera,
    triangle_segments,
    sun_light_position,
    pyramid_segments,
    pyramid_overlay,
    triangle_overlay,
    orbit_overlays,
    mesh_resolution,
    surface_mesh,
    TRIANGLE_VERTICES,
)
from spacetime.frame import FrameSnapshot
from spacetime.orbit import path_resolution, body_position
from spacetime.params import SimulationParameters
from data.bodies import get_body_by_id


class TestOverviewCamera:

    @pytest.mark.parametrize("zoom,expected", [
        (1.0, 18.0), (2.0, 9.0), (0.2, 90.0), (3.0, 6.0),
        (0.01, 90.0), (10.0, 6.0), (math.nan, 18.0),
    ])
    def test_distance(self, zoom, expected):
        assert overview_camera_distance(zoom) == pytest.approx(expected)


class TestEarthViewCamera:

    def test_rides_surface(self, full_params):
        frame = FrameSnapshot.capture(12.0, full_params)
        rig = earth_view_camera(frame)
        x, y = body_position(get_body_by_id("earth"), 12.0)
        wx, wy, wz = rig["position"]
        assert wx == pytest.approx(x)
        assert wz == pytest.approx(-y)
        assert wy == pytest.approx(frame.height(x, y) + 0.5)

    def test_on_displaced_mesh(self, full_params):
        """Camera height matches the parallel form at the same point."""
        frame = FrameSnapshot.capture(12.0, full_params)
        rig = earth_view_camera(frame)
        x, y = body_position(get_body_by_id("earth"), 12.0)
        mesh_z = float(frame.displace(x, y))
        assert rig["position"][1] == pytest.approx(mesh_z + 0.5, abs=1e-4)

    def test_looks_along_tangent(self, flat_params):
        frame = FrameSnapshot.capture(0.0, flat_params)
        rig = earth_view_camera(frame)
        px, _, pz = rig["position"]
        tx, _, tz = rig["target"]
        # plane +y is world -z; at t=0 earth moves in +y
        assert tx == pytest.approx(px, abs=1e-9)
        assert tz - pz == pytest.approx(-1.0)

    def test_other_body(self, flat_params):
        frame = FrameSnapshot.capture(1.0, flat_params)
        rig = earth_view_camera(frame, body_id="mars")
        x, _ = body_position(get_body_by_id("mars"), 1.0)
        assert rig["position"][0] == pytest.approx(x)

    @pytest.mark.parametrize("body_id", ["sun", "pluto"])
    def test_rejects_non_orbiting(self, body_id, flat_params):
        frame = FrameSnapshot.capture(0.0, flat_params)
        with pytest.raises(ValueError):
            earth_view_camera(frame, body_id=body_id)


class TestSunLight:

    def test_on_displaced_mesh(self, full_params):
        frame = FrameSnapshot.capture(7.5, full_params)
        x, y, z = sun_light_position(frame)
        assert (x, z) == (0.0, 0.0)
        assert y == pytest.approx(float(frame.displace(0.0, 0.0)), abs=1e-4)

    def test_sits_in_sun_well(self):
        params = SimulationParameters(gravity_enabled=True, precision=1.0)
        frame = FrameSnapshot.capture(0.0, params)
        assert sun_light_position(frame)[1] < -1.4

    def test_flat(self, flat_params):
        frame = FrameSnapshot.capture(3.0, flat_params)
        assert sun_light_position(frame) == (0.0, 0.0, 0.0)


class TestPyramidOverlay:

    @pytest.mark.parametrize("precision,expected", [
        (0.0, 10), (0.5, 30), (0.99, 49), (1.0, 50),
    ])
    def test_segments(self, precision, expected):
        assert pyramid_segments(precision) == expected

    def test_geometry(self, flat_params):
        frame = FrameSnapshot.capture(0.0, flat_params.replace(precision=0.25))
        pyramid = pyramid_overlay(frame)
        assert pyramid["position"] == [5.0, -5.0]
        assert pyramid["radial_segments"] == 4
        assert pyramid["height_segments"] == 20


class TestTriangleOverlay:

    @pytest.mark.parametrize("precision,expected", [
        (0.0, 30), (0.5, 65), (1.0, 100),
    ])
    def test_segments(self, precision, expected):
        assert triangle_segments(precision) == expected

    def test_closed_polyline(self, flat_params):
        frame = FrameSnapshot.capture(0.0, flat_params)
        points = triangle_overlay(frame)
        assert len(points) == 3 * triangle_segments(0.5) + 1
        assert points[0] == points[-1]
        assert points[0][:2] == TRIANGLE_VERTICES[0]

    def test_lifted_above_surface(self, full_params):
        frame = FrameSnapshot.capture(2.0, full_params)
        for x, y, z in triangle_overlay(frame)[::17]:
            assert z == pytest.approx(frame.height(x, y) + 0.1)

    def test_flat_triangle_at_lift_height(self, flat_params):
        frame = FrameSnapshot.capture(0.0, flat_params)
        assert all(p[2] == pytest.approx(0.1) for p in triangle_overlay(frame))


class TestOrbitOverlays:

    def test_every_orbiting_body(self, full_params):
        frame = FrameSnapshot.capture(0.0, full_params)
        paths = orbit_overlays(frame)
        assert list(paths) == ["mercury", "venus", "earth", "mars",
                               "jupiter", "saturn"]
        n = path_resolution(full_params.precision) + 1
        for path in paths.values():
            assert len(path["x"]) == len(path["y"]) == len(path["z"]) == n

    def test_draped_on_surface(self, full_params):
        frame = FrameSnapshot.capture(3.0, full_params)
        path = orbit_overlays(frame)["jupiter"]
        for i in (0, 10, 50):
            assert path["z"][i] == pytest.approx(
                frame.height(path["x"][i], path["y"][i]), abs=1e-4)


class TestSurfaceMesh:

    @pytest.mark.parametrize("precision,expected", [
        (0.0, 64), (0.5, 160), (1.0, 256),
    ])
    def test_resolution(self, precision, expected):
        assert mesh_resolution(precision) == expected

    def test_grid_shape(self, flat_params):
        frame = FrameSnapshot.capture(0.0, flat_params)
        X, Y, Z = surface_mesh(frame, segments=10)
        assert X.shape == Y.shape == Z.shape == (11, 11)
        assert X[0, 0] == -30.0 and X[0, -1] == 30.0

    def test_segments_capped(self, flat_params):
        frame = FrameSnapshot.capture(0.0, flat_params)
        X, _, _ = surface_mesh(frame, segments=10000)
        assert X.shape == (257, 257)

    def test_closed_bowl(self):
        frame = FrameSnapshot.capture(0.0, SimulationParameters(omega=1.4))
        _, _, Z = surface_mesh(frame, segments=8)
        assert Z[4, 4] == 0.0
        assert np.all(Z <= 0.0)
        assert Z[0, 0] < Z[2, 2]


def test_to_world():
    assert to_world(1.0, 2.0, 3.0) == (1.0, 3.0, -2.0)
