"""
View Service: camera rigs and overlay geometry.

These are the per-frame consumers that query the CPU evaluator at
arbitrary points and must land exactly on the displaced mesh.

Endpoints:
  POST /api/view/camera    -> earth-view rig (or another body), the Sun
                              light position and the overview camera
                              distance for a zoom
  POST /api/view/triangle  -> geodesic triangle polyline on the surface
                              and the pyramid overlay geometry

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

from flask import jsonify, request

from spacetime.consumers import (
    earth_view_camera,
    overview_camera_distance,
    pyramid_overlay,
    sun_light_position,
    triangle_overlay,
)
from spacetime.frame import FrameSnapshot
from spacetime.services import FieldService
from data.bodies import get_body_by_id

log = logging.getLogger(__name__)


class ViewService(FieldService):

    id = "view"
    name = "View"
    description = "Surface-riding camera, Sun light and overlay geometry"
    category = "view"
    status = "live"
    route = "/api/view"

    def validate(self, config):
        out = self.frame_config(config)
        config = config or {}
        body_id = config.get("body_id") or "earth"
        if not isinstance(body_id, str):
            raise ValueError("body_id must be a string")
        out["body_id"] = body_id.strip().lower()
        try:
            out["zoom"] = float(config.get("zoom", 1.0))
        except (TypeError, ValueError):
            raise ValueError("zoom must be a number")
        return out

    def compute(self, config):
        """Camera rig for one frame."""
        frame = FrameSnapshot.capture(config["t"], config["params"])
        rig = earth_view_camera(frame, body_id=config["body_id"])
        return {
            "t": frame.t,
            "body_id": config["body_id"],
            "rig": rig,
            "light": sun_light_position(frame),
            "overview_distance": overview_camera_distance(config["zoom"]),
        }

    def triangle(self, config):
        frame = FrameSnapshot.capture(config["t"], config["params"])
        points = triangle_overlay(frame)
        return {
            "t": frame.t,
            "points": [list(p) for p in points],
            "angle_sum": frame.regime()["angle_sum"],
            "pyramid": pyramid_overlay(frame),
        }

    def register_routes(self, bp):
        service = self

        @bp.route("/view/camera", methods=["POST"])
        def view_camera():
            data = request.get_json(silent=True)
            try:
                config = service.validate(data if data is not None else {})
            except ValueError as e:
                log.warning("Rejected camera request: %s", e)
                return jsonify({"error": str(e)}), 400
            body = get_body_by_id(config["body_id"])
            if body is None or body["orbit"]["a"] <= 0:
                return jsonify({"error": "Orbiting body not found"}), 404
            return jsonify(service.compute(config))

        @bp.route("/view/triangle", methods=["POST"])
        def view_triangle():
            data = request.get_json(silent=True)
            try:
                config = service.validate(data if data is not None else {})
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(service.triangle(config))
