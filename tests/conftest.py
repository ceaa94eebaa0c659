"""
Pytest fixtures for the OMEGA test suite.
"""

import pytest
from app import create_app

from spacetime.params import SimulationParameters


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({"TESTING": True})
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def flat_params():
    """Omega = 1, chaos and gravity off: the surface is exactly flat."""
    return SimulationParameters(omega=1.0, chaos_enabled=False,
                                gravity_enabled=False)


@pytest.fixture
def full_params():
    """Open universe with every term switched on."""
    return SimulationParameters(omega=0.7, chaos_enabled=True, chaos_speed=1.3,
                                gravity_enabled=True, precision=0.8)
