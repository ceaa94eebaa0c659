#!/usr/bin/env python3
"""
plot_surface.py
===============
Render the curvature field for one frame as a 3D surface (PNG).

The surface comes from the parallel form; the geodesic triangle and the
body markers come from the scalar evaluator, so the plot doubles as a
visual check that point queries sit on the mesh.

Run from repo root:
    python scripts/plot_surface.py --omega 0.6 --gravity --t 4 --out open.png
"""

import argparse
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from spacetime.consumers import surface_mesh, triangle_overlay
from spacetime.frame import FrameSnapshot
from spacetime.params import SimulationParameters


def main():
    ap = argparse.ArgumentParser(description="Plot the curvature field surface.")
    ap.add_argument("--omega", type=float, default=1.0, help="Density parameter")
    ap.add_argument("--chaos", action="store_true", help="Enable the chaos term")
    ap.add_argument("--chaos-speed", type=float, default=1.0, help="Chaos time multiplier")
    ap.add_argument("--gravity", action="store_true", help="Enable gravity wells")
    ap.add_argument("--precision", type=float, default=0.5, help="Precision in [0, 1]")
    ap.add_argument("--t", type=float, default=0.0, help="Simulation time (s)")
    ap.add_argument("--size", type=float, default=40.0, help="Plane side length")
    ap.add_argument("--segments", type=int, default=120, help="Grid segments per side")
    ap.add_argument("--out", default="surface.png", help="Output PNG path")
    args = ap.parse_args()

    params = SimulationParameters(
        omega=args.omega,
        chaos_enabled=args.chaos,
        chaos_speed=args.chaos_speed,
        gravity_enabled=args.gravity,
        precision=args.precision,
    )
    frame = FrameSnapshot.capture(args.t, params)
    regime = frame.regime()

    X, Y, Z = surface_mesh(frame, size=args.size, segments=args.segments)
    tri = triangle_overlay(frame)

    fig = plt.figure(figsize=(10, 8))
    ax = fig.add_subplot(111, projection="3d")
    ax.plot_surface(X, Y, Z, color=regime["color_hint"], alpha=0.6,
                    linewidth=0.2, edgecolor="k", rstride=2, cstride=2)
    ax.plot([p[0] for p in tri], [p[1] for p in tri], [p[2] for p in tri],
            color="#fbbf24", linewidth=2.5)

    for source in frame.table.sources():
        z = frame.height(source.x, source.y)
        ax.scatter([source.x], [source.y], [z + 0.2], s=25, color="white",
                   edgecolor="k")

    ax.set_title("{}  |  Omega = {:.2f}  |  triangle sum {}  |  t = {:.2f}".format(
        regime["label"], params.omega, regime["angle_sum"], frame.t))
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    fig.tight_layout()
    fig.savefig(args.out, dpi=120)
    print("Saved {}".format(args.out))


if __name__ == "__main__":
    main()
