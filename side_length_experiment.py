"""
Module: side_length_experiment
Description: Empirically evaluate the divide-and-conquer max square side.
             - Generate random sets of unique integer points.
             - Measure runtime of max_square_side.
             - Compare against theoretical O(n log n) growth (normalized n log n curve).
             - Cross-check small sizes against the O(n^2) brute force.
             - Produce plots: runtime vs theory, points with their squares.
"""

import argparse
import logging
import math
import sys
import time
from pathlib import Path
from statistics import median
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from max_side_length import (InputError, Point, closest_pair_brute_force,
                             max_square_side, square_side)
from points_io import generate_points
from side_length_config import Config, configure_logging

logger = logging.getLogger(__name__)


def time_max_square_side(points: List[Point], repeats: int = 3) -> float:
    """Median wall time (seconds) of max_square_side over `repeats` runs."""
    times = []
    for _ in range(max(1, repeats)):
        t0 = time.perf_counter()
        max_square_side(points)
        times.append(time.perf_counter() - t0)
    return median(times)


def run_experiment(sizes: Sequence[int], repeats: int = 3, seed: int = 42,
                   low: int = -10_000_000, high: int = 10_000_000,
                   brute_force_max_n: int = 2000) -> pd.DataFrame:
    """
    One row per size n:
      seconds        median measured runtime
      n_log_n        n * log2(n)
      theory_seconds c * n log2 n, with c = median(seconds / n_log_n)
      ratio          seconds / theory_seconds (flat ~1.0 means O(n log n))
      side           max_square_side result
      oracle_side    brute force result (n <= brute_force_max_n, else NaN)
      matches_oracle side == oracle_side (None when not checked)
    """
    rng = np.random.default_rng(seed)
    rows = []
    for n in sizes:
        pts = generate_points(n, rng, low, high)
        seconds = time_max_square_side(pts, repeats)
        side = max_square_side(pts)
        if n <= brute_force_max_n:
            oracle_side = square_side(closest_pair_brute_force(pts))
            matches = side == oracle_side
            if not matches:
                logger.warning("n=%d: side %d differs from brute force %d",
                               n, side, oracle_side)
        else:
            oracle_side, matches = math.nan, None
        logger.info("n=%d: %.6fs, side=%d", n, seconds, side)
        rows.append({"n": n, "seconds": seconds, "n_log_n": n * math.log2(n),
                     "side": side, "oracle_side": oracle_side,
                     "matches_oracle": matches})

    df = pd.DataFrame(rows, columns=["n", "seconds", "n_log_n", "side",
                                     "oracle_side", "matches_oracle"])
    if df.empty:
        df["theory_seconds"] = pd.Series(dtype=float)
        df["ratio"] = pd.Series(dtype=float)
        return df

    c = median((df["seconds"] / df["n_log_n"]).tolist())
    df["theory_seconds"] = c * df["n_log_n"]
    df["ratio"] = df["seconds"] / df["theory_seconds"]
    return df


# ---------- Plots ----------
def plot_runtime(df: pd.DataFrame, path: Optional[Path] = None, cfg: Optional[Config] = None):
    """Measured runtime vs the normalized n log n curve."""
    import matplotlib.pyplot as plt

    cfg = cfg or Config()
    fig, ax = plt.subplots()
    ax.plot(df["n"], df["seconds"], "o-", label="Measured (median)")
    ax.plot(df["n"], df["theory_seconds"], "--", label="c · n log n")
    ax.set_xlabel("n")
    ax.set_ylabel("seconds")
    ax.set_title("Max square side: runtime vs O(n log n)")
    ax.legend()
    if path is not None:
        fig.savefig(path, dpi=cfg.get_nested("plot", "dpi"))
        plt.close(fig)
        return None
    return fig


def plot_squares(points: List[Point], side: int, path: Optional[Path] = None,
                 cfg: Optional[Config] = None):
    """Points with the side x side square centered on each one."""
    import matplotlib.pyplot as plt
    from matplotlib.patches import Rectangle

    cfg = cfg or Config()
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    fig, ax = plt.subplots()
    half = side / 2.0
    for x, y in pts:
        ax.add_patch(Rectangle((x - half, y - half), side, side,
                               alpha=cfg.get_nested("plot", "square_alpha")))
    if len(pts) > 0:
        ax.scatter(pts[:, 0], pts[:, 1], s=15, label="Points")
        ax.legend()
    ax.set_aspect("equal", adjustable="datalim")
    ax.autoscale_view()
    ax.set_title(f"Squares of side {side} (n = {len(pts)})")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if path is not None:
        fig.savefig(path, dpi=cfg.get_nested("plot", "dpi"))
        plt.close(fig)
        return None
    return fig


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Runtime of the divide-and-conquer max square side vs n log n.",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML config file (defaults to side_length_config.yaml).")
    parser.add_argument("--csv", type=Path, default=None,
                        help="Write the results table here.")
    parser.add_argument("--plot", type=Path, default=None,
                        help="Save the runtime plot here.")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    try:
        cfg = Config(args.config)
    except InputError as e:
        configure_logging(verbose=args.verbose)
        logger.error("Invalid config: %s", e)
        return 1
    configure_logging(cfg, verbose=args.verbose)
    exp = cfg["experiment"]

    try:
        df = run_experiment(exp["sizes"], exp["repeats"], exp["seed"],
                            exp["coord_low"], exp["coord_high"],
                            exp["brute_force_max_n"])
        print(df.to_string(index=False))
        if args.csv is not None:
            df.to_csv(args.csv, index=False)
            logger.info("Results written to %s", args.csv)
        if args.plot is not None:
            plot_runtime(df, path=args.plot, cfg=cfg)
            logger.info("Plot written to %s", args.plot)
    except InputError as e:
        logger.error("Invalid input: %s", e)
        return 1
    except Exception as e:
        logger.exception("An error occurred: %s", e)
        return 1
    if (df["matches_oracle"] == False).any():  # noqa: E712
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
