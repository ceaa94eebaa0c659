#!/usr/bin/env python3
"""
parity_sweep.py
===============
Random sweep comparing the scalar CPU evaluator with the parallel form.

For each sample a random (x, y, t, params) is drawn, a FrameSnapshot is
captured, and spacetime.curvature.height is compared with
spacetime.kernel.displace on the same snapshot. Reports the worst
deviation per precision mode.

Run from repo root:
    python scripts/parity_sweep.py --samples 10000 --seed 7
"""

import argparse
import os
import sys
import time
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np

from spacetime.constants import PARITY_TOLERANCE
from spacetime.frame import FrameSnapshot
from spacetime.params import SimulationParameters


def random_params(rng):
    return SimulationParameters(
        omega=rng.uniform(0.5, 1.5),
        chaos_enabled=bool(rng.integers(0, 2)),
        chaos_speed=rng.uniform(0.1, 5.0),
        gravity_enabled=bool(rng.integers(0, 2)),
        precision=rng.uniform(0.0, 1.0),
    )


def sweep(samples, seed, dtype, t_max, extent):
    """Return (worst deviation, worst sample description)."""
    rng = np.random.default_rng(seed)
    worst = 0.0
    worst_case = None
    for _ in range(samples):
        params = random_params(rng)
        t = rng.uniform(0.0, t_max)
        x, y = rng.uniform(-extent, extent, size=2)
        frame = FrameSnapshot.capture(t, params)
        cpu = frame.height(float(x), float(y))
        gpu = float(frame.displace(x, y, dtype=dtype))
        dev = abs(cpu - gpu)
        if dev > worst:
            worst = dev
            worst_case = (x, y, t, params)
    return worst, worst_case


def main():
    ap = argparse.ArgumentParser(description="CPU vs parallel curvature parity sweep.")
    ap.add_argument("--samples", type=int, default=10000, help="Number of random samples")
    ap.add_argument("--seed", type=int, default=7, help="RNG seed")
    ap.add_argument("--t-max", type=float, default=120.0, help="Max simulation time (s)")
    ap.add_argument("--extent", type=float, default=30.0, help="Half-width of the sampled plane")
    args = ap.parse_args()

    bar = "=" * 72
    print(bar)
    print("  CURVATURE PARITY SWEEP: {} samples, seed {}".format(args.samples, args.seed))
    print(bar)

    for label, dtype in (("float64", np.float64), ("float32", np.float32)):
        t0 = time.time()
        worst, case = sweep(args.samples, args.seed, dtype, args.t_max, args.extent)
        status = "OK" if worst <= PARITY_TOLERANCE else "ABOVE TOLERANCE"
        print("  {:8s} worst |dz| = {:.3e}  ({})  {:.2f}s".format(
            label, worst, status, time.time() - t0))
        if case is not None and worst > PARITY_TOLERANCE:
            x, y, t, params = case
            print("           at x={:.4f} y={:.4f} t={:.4f} {!r}".format(x, y, t, params))
    print(bar)


if __name__ == "__main__":
    main()
