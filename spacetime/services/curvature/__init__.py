"""
Curvature Service: the curvature field over HTTP.

Point queries use the scalar CPU evaluator; grids use the parallel form.
Both are bound to one FrameSnapshot per request, exactly as a rendered
frame would be.

Endpoints:
  POST /api/curvature/height    -> CPU heights at a list of [x, y] points
  POST /api/curvature/surface   -> displaced plane grid (parallel form)
  POST /api/curvature/uniforms  -> the frame's uniform block
  GET  /api/curvature/shader    -> generated GLSL (chunk + plane vertex stage)
  POST /api/curvature/regime    -> geometry regime for the frame's omega
  POST /api/curvature/parity    -> max CPU vs parallel deviation on a grid

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

import numpy as np
from flask import jsonify, request

from spacetime.constants import PARITY_TOLERANCE
from spacetime.consumers import PLANE_SIZE, MESH_MAX_SEGMENTS, surface_mesh
from spacetime.frame import FrameSnapshot
from spacetime.kernel import to_json_uniforms
from spacetime.services import FieldService
from spacetime.shader import curvature_glsl, universe_vertex_shader

log = logging.getLogger(__name__)

MAX_POINTS = 10000
MAX_PARITY_SEGMENTS = 128
DEFAULT_PARITY_SEGMENTS = 32


def _safe_tolist(arr):
    """Convert an array to a nested list, non-finite values as None."""
    arr = np.asarray(arr, dtype=float)
    if arr.ndim > 1:
        return [_safe_tolist(row) for row in arr]
    return [float(v) if np.isfinite(v) else None for v in arr]


def _parse_points(raw):
    if raw is None:
        raise ValueError("points is required")
    if not isinstance(raw, list):
        raise ValueError("points must be a list of [x, y] pairs")
    if len(raw) > MAX_POINTS:
        raise ValueError("At most {} points per request".format(MAX_POINTS))
    points = []
    for p in raw:
        if not isinstance(p, (list, tuple)) or len(p) != 2:
            raise ValueError("points must be a list of [x, y] pairs")
        try:
            points.append((float(p[0]), float(p[1])))
        except (TypeError, ValueError):
            raise ValueError("point coordinates must be numbers")
    return points


class CurvatureService(FieldService):
    """Curvature field evaluation: CPU point queries and parallel grids."""

    id = "curvature"
    name = "Curvature Field"
    description = "Surface height from density parameter, chaos and gravity wells"
    category = "field"
    status = "live"
    route = "/api/curvature"

    def validate(self, config):
        """
        Normalize a surface/height request.

        Returns
        -------
        dict
            t, params, size (plane side length), segments (grid
            resolution or None for the precision default).
        """
        out = self.frame_config(config)
        config = config or {}
        try:
            out["size"] = float(config.get("size", PLANE_SIZE))
            segments = config.get("segments")
            out["segments"] = None if segments is None else int(segments)
        except (TypeError, ValueError):
            raise ValueError("size and segments must be numbers")
        if not out["size"] > 0:
            raise ValueError("size must be positive")
        if out["segments"] is not None:
            out["segments"] = max(1, min(out["segments"], MESH_MAX_SEGMENTS))
        return out

    def compute(self, config):
        """Displaced surface grid for one frame."""
        frame = FrameSnapshot.capture(config["t"], config["params"])
        X, Y, Z = surface_mesh(frame, size=config["size"],
                               segments=config["segments"])
        axis = X[0, :]
        return {
            "t": frame.t,
            "params": frame.params.to_dict(),
            "regime": frame.regime(),
            "segments": int(len(axis) - 1),
            "axis": axis.tolist(),
            "z": _safe_tolist(Z),
        }

    def heights(self, config, points):
        """CPU heights at arbitrary points for one frame."""
        frame = FrameSnapshot.capture(config["t"], config["params"])
        values = [frame.height(x, y) for x, y in points]
        return {
            "t": frame.t,
            "params": frame.params.to_dict(),
            "heights": _safe_tolist(values),
        }

    def parity(self, config):
        """
        Compare the scalar and parallel evaluators on a square grid.

        Returns
        -------
        dict
            max_abs_deviation, tolerance, within_tolerance, n_points.
        """
        frame = FrameSnapshot.capture(config["t"], config["params"])
        segments = config["segments"] or DEFAULT_PARITY_SEGMENTS
        segments = min(segments, MAX_PARITY_SEGMENTS)
        half = config["size"] / 2.0
        axis = np.linspace(-half, half, segments + 1)
        X, Y = np.meshgrid(axis, axis)
        gpu = frame.displace(X, Y)
        cpu = np.array([[frame.height(float(x), float(y))
                         for x, y in zip(row_x, row_y)]
                        for row_x, row_y in zip(X, Y)])
        deviation = float(np.max(np.abs(cpu - gpu)))
        if deviation > PARITY_TOLERANCE:
            log.warning("CPU/parallel deviation %.3g exceeds %.1g at t=%s",
                        deviation, PARITY_TOLERANCE, frame.t)
        return {
            "t": frame.t,
            "params": frame.params.to_dict(),
            "n_points": int(cpu.size),
            "max_abs_deviation": deviation,
            "tolerance": PARITY_TOLERANCE,
            "within_tolerance": deviation <= PARITY_TOLERANCE,
        }

    def register_routes(self, bp):
        """Mount all curvature endpoints."""
        service = self

        def _validated():
            data = request.get_json(silent=True)
            return service.validate(data if data is not None else {})

        @bp.route("/curvature/height", methods=["POST"])
        def curvature_height():
            data = request.get_json(silent=True)
            if not data:
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                config = service.validate(data)
                points = _parse_points(data.get("points"))
            except ValueError as e:
                log.warning("Rejected height request: %s", e)
                return jsonify({"error": str(e)}), 400
            return jsonify(service.heights(config, points))

        @bp.route("/curvature/surface", methods=["POST"])
        def curvature_surface():
            try:
                config = _validated()
            except ValueError as e:
                log.warning("Rejected surface request: %s", e)
                return jsonify({"error": str(e)}), 400
            return jsonify(service.compute(config))

        @bp.route("/curvature/uniforms", methods=["POST"])
        def curvature_uniforms():
            try:
                config = _validated()
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            frame = FrameSnapshot.capture(config["t"], config["params"])
            return jsonify({
                "t": frame.t,
                "uniforms": to_json_uniforms(frame.uniforms),
                "sources": frame.table.to_dict()["sources"],
            })

        @bp.route("/curvature/shader", methods=["GET"])
        def curvature_shader():
            return jsonify({
                "curvature_common": curvature_glsl(),
                "universe_vertex": universe_vertex_shader(),
            })

        @bp.route("/curvature/regime", methods=["POST"])
        def curvature_regime():
            try:
                config = _validated()
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            frame = FrameSnapshot.capture(config["t"], config["params"])
            return jsonify(frame.regime())

        @bp.route("/curvature/parity", methods=["POST"])
        def curvature_parity():
            try:
                config = _validated()
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(service.parity(config))
