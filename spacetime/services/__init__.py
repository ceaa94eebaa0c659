"""
Service layer: FieldService ABC and FieldRegistry.

Each concern exposed over HTTP (the curvature field itself, the orbit
solver, the view consumers) is a FieldService registered with the
FieldRegistry. Services are looked up by id at runtime, and each
service owns its own API endpoints, config validation and result
format.

Classes:
    FieldService  - Abstract base class for all services
    FieldRegistry - Central lookup container for registered services

Every service request carries the same frame description:

    {"t": 12.5, "params": {"omega": 0.7, "chaos_enabled": true, ...}}

FieldService.frame_config() turns that into (t, SimulationParameters).

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math
from abc import ABC, abstractmethod

from spacetime.params import SimulationParameters

log = logging.getLogger(__name__)


class FieldService(ABC):
    """
    Abstract base class for a service.

    Class Attributes
    ----------------
    id : str
        Unique service identifier (e.g. "curvature", "orbits").
    name : str
        Human-readable display name.
    description : str
        One-liner for the service listing.
    category : str
        Grouping for the listing. One of "field", "orbits", "view".
    status : str
        "live" or "coming_soon".
    route : str
        URL prefix of the service's endpoints under /api.
    """

    id = ""
    name = ""
    description = ""
    category = ""
    status = "coming_soon"
    route = ""

    @abstractmethod
    def validate(self, config):
        """
        Validate raw input and return a normalized config dict.

        Raises
        ------
        ValueError
            If the config is invalid.
        """

    @abstractmethod
    def compute(self, config):
        """
        Run the service computation on a validated config.

        Returns
        -------
        dict
            JSON-serializable result with service-specific keys.
        """

    def register_routes(self, blueprint):
        """
        Mount service-specific API endpoints onto a Flask blueprint.

        Coming-soon services inherit this no-op.
        """
        pass

    def frame_config(self, config):
        """
        Parse the shared frame description of a request.

        Parameters
        ----------
        config : dict
            Raw request payload with optional "t" (default 0.0) and
            "params" (SimulationParameters dict).

        Returns
        -------
        dict
            {"t": float, "params": SimulationParameters}

        Raises
        ------
        ValueError
            If t is not a finite number, params is not an object, or
            chaos_speed is not positive.
        """
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ValueError("Request body must be a JSON object")
        try:
            t = float(config.get("t", 0.0))
        except (TypeError, ValueError):
            raise ValueError("t must be a number")
        if not math.isfinite(t):
            raise ValueError("t must be finite")
        raw_params = config.get("params") or {}
        if not isinstance(raw_params, dict):
            raise ValueError("params must be an object")
        params = SimulationParameters.from_dict(raw_params)
        if params.chaos_speed <= 0:
            raise ValueError("chaos_speed must be positive")
        return {"t": t, "params": params}

    def metadata(self):
        """
        Return service metadata for the registry listing.

        Returns
        -------
        dict
            Service info: id, name, description, category, status, route.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "status": self.status,
            "route": self.route,
        }


class FieldRegistry:
    """
    Central lookup container for registered FieldService instances.

    Services register themselves at app startup. The registry provides
    lookup by id, listing, and iteration over live services for API
    route mounting.
    """

    def __init__(self):
        self._services = {}

    def register(self, service):
        """
        Register a service instance.

        Raises
        ------
        ValueError
            If a service with the same id is already registered.
        """
        if service.id in self._services:
            raise ValueError(
                "Service '{}' is already registered".format(service.id)
            )
        self._services[service.id] = service
        log.debug("Registered service '%s'", service.id)

    def get(self, service_id):
        """Look up a service by id; None if not found."""
        return self._services.get(service_id)

    def list_all(self):
        """Metadata for all registered services, in registration order."""
        return [s.metadata() for s in self._services.values()]

    def live(self):
        """Return all services with status 'live'."""
        return [s for s in self._services.values()
                if s.status == "live"]
