"""
Orbits Service: body positions and orbit paths.

Endpoints:
  POST /api/orbits/positions  -> plane position, orbit angle and well mass
                                 of every body at time t (Sun last)
  POST /api/orbits/paths      -> orbit polylines draped over the surface

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

from flask import jsonify, request

from spacetime.consumers import orbit_overlays
from spacetime.frame import FrameSnapshot
from spacetime.orbit import orbit_angle
from spacetime.services import FieldService
from data.bodies import get_orbiting_bodies


class OrbitService(FieldService):

    id = "orbits"
    name = "Orbits"
    description = "Elliptical body positions with the Sun at a focus"
    category = "orbits"
    status = "live"
    route = "/api/orbits"

    def validate(self, config):
        return self.frame_config(config)

    def compute(self, config):
        """Positions of all mass sources at the requested time."""
        frame = FrameSnapshot.capture(config["t"], config["params"])
        angles = {b["id"]: orbit_angle(frame.t, b["orbit"]["speed"])
                  for b in get_orbiting_bodies()}
        bodies = []
        for source in frame.table.sources():
            entry = source.to_dict()
            entry["angle"] = angles.get(source.body_id)
            entry["z"] = frame.height(source.x, source.y)
            bodies.append(entry)
        return {"t": frame.t, "bodies": bodies}

    def paths(self, config):
        frame = FrameSnapshot.capture(config["t"], config["params"])
        return {"t": frame.t, "paths": orbit_overlays(frame)}

    def register_routes(self, bp):
        service = self

        @bp.route("/orbits/positions", methods=["POST"])
        def orbits_positions():
            data = request.get_json(silent=True)
            try:
                config = service.validate(data if data is not None else {})
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(service.compute(config))

        @bp.route("/orbits/paths", methods=["POST"])
        def orbits_paths():
            data = request.get_json(silent=True)
            try:
                config = service.validate(data if data is not None else {})
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(service.paths(config))
