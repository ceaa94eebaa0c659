"""
CPU / parallel parity of the curvature field.

The scalar evaluator (spacetime.curvature.height) and the numpy
transcription of the generated GLSL (spacetime.kernel.displace) must
agree on every sample of a fixed random sweep. A constant that differs
between the two forms (a chaos frequency, a well width, a threshold)
shows up here as a deviation far above tolerance.
"""

import numpy as np
import pytest

from spacetime.constants import PARITY_TOLERANCE
from spacetime.frame import FrameSnapshot
from spacetime.params import SimulationParameters

N_SAMPLES = 10000
SEED = 20240917
FLOAT32_TOLERANCE = 1e-3


def random_samples(n, seed, t_max, speed_max):
    """Fixed list of (x, y, t, params) tuples."""
    rng = np.random.default_rng(seed)
    samples = []
    for _ in range(n):
        params = SimulationParameters(
            omega=rng.uniform(0.5, 1.5),
            chaos_enabled=bool(rng.integers(0, 2)),
            chaos_speed=rng.uniform(0.1, speed_max),
            gravity_enabled=bool(rng.integers(0, 2)),
            precision=rng.uniform(0.0, 1.0),
        )
        x, y = rng.uniform(-30.0, 30.0, size=2)
        t = rng.uniform(0.0, t_max)
        samples.append((float(x), float(y), float(t), params))
    return samples


def max_deviation(samples, dtype):
    worst = 0.0
    for x, y, t, params in samples:
        frame = FrameSnapshot.capture(t, params)
        cpu = frame.height(x, y)
        gpu = float(frame.displace(x, y, dtype=dtype))
        worst = max(worst, abs(cpu - gpu))
    return worst


class TestRandomSweep:

    def test_float64_parity(self):
        samples = random_samples(N_SAMPLES, SEED, t_max=120.0, speed_max=5.0)
        assert max_deviation(samples, np.float64) <= PARITY_TOLERANCE

    def test_float32_parity(self):
        """Single precision, as a GPU would evaluate it."""
        samples = random_samples(2000, SEED + 1, t_max=30.0, speed_max=3.0)
        assert max_deviation(samples, np.float32) <= FLOAT32_TOLERANCE


class TestGridParity:

    @pytest.mark.parametrize("omega", [0.5, 0.97, 0.98, 1.0, 1.02, 1.03, 1.5])
    def test_threshold_neighbourhood(self, omega):
        params = SimulationParameters(omega=omega, chaos_enabled=True,
                                      gravity_enabled=True, precision=1.0)
        frame = FrameSnapshot.capture(9.5, params)
        axis = np.linspace(-30.0, 30.0, 41)
        X, Y = np.meshgrid(axis, axis)
        gpu = frame.displace(X, Y)
        cpu = np.array([[frame.height(float(x), float(y))
                         for x, y in zip(rx, ry)] for rx, ry in zip(X, Y)])
        np.testing.assert_allclose(gpu, cpu, rtol=0, atol=PARITY_TOLERANCE)

    def test_float32_threshold_branch_follows_host(self):
        """omega just inside the band stays flat in single precision."""
        params = SimulationParameters(omega=1.02)
        frame = FrameSnapshot.capture(0.0, params)
        z = frame.displace(np.array([25.0, -25.0]), np.array([25.0, 3.0]),
                           dtype=np.float32)
        assert np.all(z == 0.0)

    def test_gravity_toggle_parity(self, full_params):
        frame_on = FrameSnapshot.capture(4.0, full_params)
        frame_off = FrameSnapshot.capture(4.0, full_params.replace(
            gravity_enabled=False))
        xs = np.array([0.0, 6.0, -12.0, 16.0])
        ys = np.array([0.0, 1.0, 2.0, -3.0])
        for frame in (frame_on, frame_off):
            gpu = frame.displace(xs, ys)
            cpu = [frame.height(float(x), float(y)) for x, y in zip(xs, ys)]
            np.testing.assert_allclose(gpu, cpu, rtol=0, atol=PARITY_TOLERANCE)
