"""
Per-frame snapshot of everything the curvature field reads.

Order inside a frame:
  1. mass source table from (t, params)
  2. uniform block from (t, params, table)
  3. CPU queries and parallel displacement, both bound to 1 and 2

A FrameSnapshot is built once per rendered frame and handed to every
consumer; nothing reads ambient "current parameters".

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math

import numpy as np

from spacetime import curvature, kernel, mass_sources
from spacetime.regime import classify_regime

log = logging.getLogger(__name__)


class FrameSnapshot:
    """
    Immutable (t, params, mass sources, uniforms) for one frame.

    Use FrameSnapshot.capture() rather than the constructor.
    """

    def __init__(self, t, params, table, uniforms):
        self.t = t
        self.params = params
        self.table = table
        self.uniforms = uniforms

    @classmethod
    def capture(cls, t, params):
        """
        Build the snapshot for time t.

        Parameters
        ----------
        t : float
            Simulation time in seconds (finite).
        params : SimulationParameters
            Parameters for this frame.

        Raises
        ------
        ValueError
            If t is not finite.
        """
        t = float(t)
        if not math.isfinite(t):
            raise ValueError("Frame time must be finite, got {!r}".format(t))
        table = mass_sources.snapshot(t, params)
        uniforms = kernel.build_uniforms(t, params, table)
        return cls(t, params, table, uniforms)

    def height(self, x, y):
        """CPU surface height at a single point."""
        return curvature.height(x, y, self.t, self.params, self.table)

    def displace(self, xs, ys, dtype=np.float64):
        """Parallel-form surface heights for arrays of points."""
        return kernel.displace(xs, ys, self.uniforms, dtype=dtype)

    def regime(self):
        return classify_regime(self.params.omega)


class FrameSequencer:
    """
    Hands out frame snapshots against a monotonic simulation clock.

    The clock may stand still (paused simulation) but never run backwards.
    """

    def __init__(self):
        self.last_time = None
        self.frame_count = 0

    def begin(self, t, params):
        """
        Capture the snapshot for the next frame.

        Raises
        ------
        ValueError
            If t is not finite or is earlier than the previous frame.
        """
        t = float(t)
        if self.last_time is not None and t < self.last_time:
            raise ValueError(
                "Simulation clock went backwards: {} < {}".format(
                    t, self.last_time))
        frame = FrameSnapshot.capture(t, params)
        self.last_time = t
        self.frame_count += 1
        log.debug("Frame %d captured at t=%.4f", self.frame_count, t)
        return frame
