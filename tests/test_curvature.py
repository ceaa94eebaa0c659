"""
Tests for the scalar curvature field.

Verifies:
  1. Metric term: exact 0 inside the flat band, sign and shape outside,
     and the boundary behaviour at 0.97 / 0.98 / 1.02 / 1.03.
  2. Totality: NaN / inf coordinates give 0.
  3. Gravity wells: deepest at the source, monotone towards 0 with
     distance; gravity toggle equivalent to all-zero masses.
  4. End-to-end scenarios for flat and open universes.
"""

import math
import pytest

from spacetime.curvature import (
    metric_term,
    chaos_noise,
    chaos_term,
    gravity_term,
    height,
)
from spacetime.mass_sources import MAX_MASS_SOURCES, MassSourceTable, snapshot
from spacetime.params import SimulationParameters


def lone_source_table(x, y, mass, width=0.1):
    """Table with one well at (x, y) and every other entry massless."""
    positions = [(0.0, 0.0)] * MAX_MASS_SOURCES
    masses = [0.0] * MAX_MASS_SOURCES
    widths = [0.1] * MAX_MASS_SOURCES
    positions[0] = (x, y)
    masses[0] = mass
    widths[0] = width
    ids = ["s{}".format(i) for i in range(MAX_MASS_SOURCES)]
    return MassSourceTable(ids, positions, masses, widths)


class TestMetricTerm:

    @pytest.mark.parametrize("omega", [0.98, 0.99, 1.0, 1.01, 1.02])
    @pytest.mark.parametrize("x,y", [(0.0, 0.0), (10.0, 0.0), (-25.0, 17.0)])
    def test_flat_band_is_exactly_zero(self, omega, x, y):
        assert metric_term(x, y, omega) == 0.0

    def test_boundaries(self):
        x, y = 10.0, 4.0
        assert metric_term(x, y, 0.97) != 0.0
        assert metric_term(x, y, 0.98) == 0.0
        assert metric_term(x, y, 1.02) == 0.0
        assert metric_term(x, y, 1.03) != 0.0

    def test_closed_bowl_value(self):
        """omega=1.5 at (10, 0): -(0.5*2*2) * (1 * 2) = -4."""
        assert metric_term(10.0, 0.0, 1.5) == pytest.approx(-4.0)

    def test_open_saddle_value(self):
        """omega=0.5 at (10, 0): (0.5*2*2) * (1 - 0) * 2 = 4."""
        assert metric_term(10.0, 0.0, 0.5) == pytest.approx(4.0)
        assert metric_term(0.0, 10.0, 0.5) == pytest.approx(-4.0)

    def test_closed_radially_symmetric(self):
        assert metric_term(3.0, 4.0, 1.3) == pytest.approx(
            metric_term(5.0, 0.0, 1.3))

    def test_continuous_outside_band(self):
        """Small omega steps away from the thresholds give small changes."""
        a = metric_term(12.0, 3.0, 1.2)
        b = metric_term(12.0, 3.0, 1.2 + 1e-9)
        assert abs(a - b) < 1e-7


class TestChaos:

    def test_time_scaled_by_speed(self):
        assert chaos_term(2.0, -3.0, 4.0, 0.5) == pytest.approx(
            chaos_noise(2.0, -3.0, 2.0) * 2.0)

    def test_origin_at_t0(self):
        """Only the cos(y*1.5) axis layer survives: 0.25 * E."""
        assert chaos_term(0.0, 0.0, 0.0, 1.0) == pytest.approx(0.5)

    def test_bounded(self):
        for x, y, t in [(1.0, 2.0, 0.3), (-20.0, 11.0, 9.0), (29.0, -29.0, 100.0)]:
            assert abs(chaos_term(x, y, t, 1.0)) <= (0.5 + 0.25 + 0.25 + 0.1) * 2.0

    def test_chaos_toggle(self):
        on = SimulationParameters(chaos_enabled=True)
        off = SimulationParameters(chaos_enabled=False)
        assert height(3.0, 1.0, 2.0, off) == 0.0
        assert height(3.0, 1.0, 2.0, on) == pytest.approx(
            chaos_term(3.0, 1.0, 2.0, 1.0))


class TestGravityWells:

    def test_deepest_at_source(self):
        table = lone_source_table(4.0, -2.0, 1.0)
        at_source = gravity_term(4.0, -2.0, table)
        assert at_source == pytest.approx(-1.0)
        for dx in [0.1, 0.5, 1.0]:
            assert gravity_term(4.0 + dx, -2.0, table) > at_source

    def test_monotone_with_distance(self):
        table = lone_source_table(0.0, 0.0, 0.8)
        distances = [0.0, 0.25, 0.5, 1.0, 2.0, 3.0, 5.0]
        values = [gravity_term(d, 0.0, table) for d in distances]
        for near, far in zip(values, values[1:]):
            assert near <= far < 0.0

    def test_gaussian_profile(self):
        table = lone_source_table(0.0, 0.0, 2.0, width=0.1)
        assert gravity_term(3.0, 4.0, table) == pytest.approx(
            -2.0 * math.exp(-25.0 * 0.1))

    def test_massless_sources_ignored(self):
        table = lone_source_table(0.0, 0.0, 0.0)
        assert gravity_term(0.0, 0.0, table) == 0.0

    def test_gravity_toggle_equals_zero_masses(self):
        on = SimulationParameters(omega=0.8, chaos_enabled=True,
                                  gravity_enabled=True, precision=0.7)
        off = on.replace(gravity_enabled=False)
        t = 6.25
        zero_table = snapshot(t, off)
        assert zero_table.total_mass() == 0.0
        for x, y in [(0.0, 0.0), (6.4, 0.1), (-11.0, 3.0), (15.0, -15.0)]:
            assert height(x, y, t, off) == height(x, y, t, on, zero_table)

    def test_uses_supplied_table(self):
        params = SimulationParameters(gravity_enabled=True, precision=1.0)
        table = lone_source_table(1.0, 1.0, 0.5)
        assert height(1.0, 1.0, 0.0, params, table) == pytest.approx(-0.5)

    def test_sun_well_at_origin(self):
        params = SimulationParameters(gravity_enabled=True, precision=1.0)
        assert height(0.0, 0.0, 0.0, params) < -1.4


class TestTotality:

    @pytest.mark.parametrize("params", [
        SimulationParameters(),
        SimulationParameters(omega=0.6, chaos_enabled=True,
                             gravity_enabled=True),
        SimulationParameters(omega=1.4, chaos_enabled=True,
                             chaos_speed=2.5, gravity_enabled=True),
    ])
    @pytest.mark.parametrize("t", [0.0, 3.7, 250.0])
    def test_nan_coordinates(self, params, t):
        assert height(math.nan, 0.0, t, params) == 0.0
        assert height(0.0, math.nan, t, params) == 0.0

    def test_infinite_coordinates(self):
        params = SimulationParameters(omega=1.3, gravity_enabled=True)
        assert height(math.inf, 1.0, 0.0, params) == 0.0
        assert height(1.0, -math.inf, 0.0, params) == 0.0

    @pytest.mark.parametrize("t", [math.inf, -math.inf, math.nan])
    def test_non_finite_time_with_gravity(self, t):
        params = SimulationParameters(omega=0.7, chaos_enabled=True,
                                      gravity_enabled=True)
        assert height(1.0, 1.0, t, params) == 0.0
        assert height(1.0, 1.0, t, params.replace(chaos_enabled=False)) == 0.0

    def test_nan_sum_becomes_zero(self):
        """Infinite time drives the chaos sines to NaN."""
        params = SimulationParameters(chaos_enabled=True)
        assert height(1.0, 1.0, math.inf, params) == 0.0


class TestScenarios:

    @pytest.mark.parametrize("x,y,t", [
        (0.0, 0.0, 0.0), (10.0, -3.0, 5.0), (-29.0, 29.0, 1000.0),
    ])
    def test_flat_universe_is_flat(self, x, y, t, flat_params):
        assert height(x, y, t, flat_params) == pytest.approx(0.0)

    def test_open_universe_rises_along_x(self):
        params = SimulationParameters(omega=0.5)
        assert height(10.0, 0.0, 0.0, params) > 0.0

    def test_closed_universe_sinks(self):
        params = SimulationParameters(omega=1.5)
        assert height(10.0, 0.0, 0.0, params) < 0.0
