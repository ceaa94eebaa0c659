"""
Flask API routes shared by all services.

Endpoints:
  GET  /api/services         - registry listing
  GET  /api/bodies           - body catalog (Sun last)
  GET  /api/bodies/<id>      - single body
  GET  /api/constants        - shared curvature field constants

Service-owned endpoints (/api/curvature/*, /api/orbits/*, /api/view/*)
are mounted by each live service's register_routes().
"""

from flask import Blueprint, jsonify

from spacetime.constants import constants_dict
from spacetime.mass_sources import MAX_MASS_SOURCES
from data.bodies import get_all_bodies, get_body_by_id


def create_api_blueprint(registry):
    """
    Build the /api blueprint and mount every live service on it.

    Parameters
    ----------
    registry : FieldRegistry
        Populated service registry.

    Returns
    -------
    flask.Blueprint
    """
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/services", methods=["GET"])
    def list_services():
        """Return metadata of every registered service."""
        return jsonify(registry.list_all())

    @api.route("/bodies", methods=["GET"])
    def list_bodies():
        """Return the full body catalog, Sun last."""
        return jsonify(get_all_bodies())

    @api.route("/bodies/<body_id>", methods=["GET"])
    def get_body(body_id):
        """Return a single body by id."""
        body = get_body_by_id(body_id)
        if body is None:
            return jsonify({"error": "Body not found"}), 404
        return jsonify(body)

    @api.route("/constants", methods=["GET"])
    def get_constants():
        """Return the constants every evaluator of the field shares."""
        out = constants_dict()
        out["MAX_MASS_SOURCES"] = MAX_MASS_SOURCES
        return jsonify(out)

    for service in registry.live():
        service.register_routes(api)

    return api
