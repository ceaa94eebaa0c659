"""
Tests for the shared field constants.

The regime thresholds, well widths and chaos frequencies are read by
every evaluator; these pin their values so a change is deliberate.
"""

import pytest

from spacetime import constants
from spacetime.mass_sources import MAX_MASS_SOURCES
from data.bodies import BODIES


class TestThresholds:

    def test_flat_band_around_one(self):
        assert constants.OMEGA_OPEN_THRESHOLD == pytest.approx(0.98)
        assert constants.OMEGA_CLOSED_THRESHOLD == pytest.approx(1.02)
        assert constants.OMEGA_OPEN_THRESHOLD < 1.0 < constants.OMEGA_CLOSED_THRESHOLD

    def test_band_is_symmetric(self):
        lo = 1.0 - constants.OMEGA_OPEN_THRESHOLD
        hi = constants.OMEGA_CLOSED_THRESHOLD - 1.0
        assert lo == pytest.approx(hi, abs=1e-12)


class TestFieldConstants:

    def test_scale_and_exaggeration(self):
        assert constants.UNIVERSE_SCALE == 10.0
        assert constants.EXAGGERATION == 2.0

    def test_chaos_radial_frequency(self):
        """One radial ripple frequency for every evaluator."""
        assert constants.CHAOS_RADIAL_FREQ == 0.3

    def test_well_widths(self):
        assert constants.GRAVITY_WELL_WIDTH == 0.1
        assert constants.SUN_GRAVITY_WIDTH == 0.05
        # Sun well is broader in world units
        assert constants.SUN_GRAVITY_WIDTH < constants.GRAVITY_WELL_WIDTH

    def test_orbit_rate(self):
        assert constants.ORBIT_RATE == 0.5

    def test_fallbacks(self):
        assert constants.DEFAULT_OMEGA == 1.0
        assert constants.DEFAULT_CHAOS_SPEED == 1.0

    def test_metric_factor_symmetric(self):
        assert constants.metric_factor(1.5) == pytest.approx(2.0)
        assert constants.metric_factor(0.5) == pytest.approx(2.0)
        assert constants.metric_factor(1.0) == 0.0


class TestConstantsDict:

    def test_keys_present(self):
        d = constants.constants_dict()
        for key in ("UNIVERSE_SCALE", "EXAGGERATION", "CHAOS_RADIAL_FREQ",
                    "GRAVITY_WELL_WIDTH", "SUN_GRAVITY_WIDTH",
                    "OMEGA_OPEN_THRESHOLD", "OMEGA_CLOSED_THRESHOLD"):
            assert key in d

    def test_table_arity_matches_catalog(self):
        assert MAX_MASS_SOURCES == len(BODIES) + 1 == 7
