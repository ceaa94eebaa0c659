"""
OMEGA - curvature field server.
Flask application factory.

Serves the curvature field (CPU point queries, parallel-form grids,
generated GLSL), the orbit solver and the view consumers as a JSON API
via registered FieldService instances, for a browser renderer to
consume.

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI
"""

__version__ = "0.1.0"

import logging

from flask import Flask, jsonify

from spacetime.services import FieldRegistry
from spacetime.services.curvature import CurvatureService
from spacetime.services.orbits import OrbitService
from spacetime.services.view import ViewService


def create_registry():
    """Build and populate the service registry."""
    registry = FieldRegistry()
    registry.register(CurvatureService())
    registry.register(OrbitService())
    registry.register(ViewService())
    return registry


def create_app(config=None):
    """
    Application factory for the OMEGA Flask app.

    Parameters
    ----------
    config : dict, optional
        Flask config overrides (e.g. {"TESTING": True}).
    """
    app = Flask(__name__)
    if config:
        app.config.update(config)

    # Build service registry
    registry = create_registry()

    # Create and register API blueprint (shared + service-owned routes)
    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry)
    app.register_blueprint(api)

    @app.route("/")
    def root():
        return jsonify({
            "name": "omega",
            "version": __version__,
            "services": registry.list_all(),
        })

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)
