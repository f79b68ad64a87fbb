"""
Module: max_side_length
Description: Maximum side length of non-overlapping squares centered on points.
             - Sort the points twice (by x, by y) once up front.
             - Find the closest (Euclidean) pair with divide and conquer.
             - Report that pair's Chebyshev distance as the square side.

@version: 1.0
"""

__version__ = "1.0"
__project__ = "Max Side Length: Divide-and-Conquer Closest Pair"


import argparse
import itertools
import logging
import math
import operator
import sys
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

# the stripe scan never looks further than this many points ahead (in y-order)
STRIPE_LOOKAHEAD = 6


class InputError(ValueError):
    """Malformed or insufficient point input."""


class InternalInvariantError(RuntimeError):
    """Bookkeeping defect inside the recursion. Not caused by bad input."""


class Pair(NamedTuple):
    p: Point
    q: Point
    dist: int  # floor of the Euclidean distance


# ---------- Distance helpers ----------
def euclidean_floor(a: Point, b: Point) -> int:
    """
    floor(sqrt(dx^2 + dy^2)), computed exactly on integers.
    Both the pair comparisons and the stripe width use this truncated value.
    """
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return math.isqrt(dx * dx + dy * dy)

def chebyshev(a: Point, b: Point) -> int:
    """max(|dx|, |dy|)"""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))

def make_pair(a: Point, b: Point) -> Pair:
    return Pair(a, b, euclidean_floor(a, b))

def square_side(pair: Pair) -> int:
    """
    Side of the largest axis-aligned squares centered on the two points
    that still do not overlap: the Chebyshev distance of the pair.
    """
    return chebyshev(pair.p, pair.q)

# ---------- Dual ordering ----------
def as_point(p) -> Point:
    """(x, y) with integral coordinates (int or numpy integer), else InputError."""
    try:
        x, y = p
        return (operator.index(x), operator.index(y))
    except (TypeError, ValueError):
        raise InputError(f"points must be pairs of integers, got {p!r}") from None

def dual_order(points: Iterable[Point]) -> Tuple[List[Point], List[Point]]:
    """
    Two views of the same points:
      - x_order: by x, ties broken by y
      - y_order: by y only (stable, so equal y keeps the input order)
    Done once at the top level; the recursion only filters these.
    """
    pts = [as_point(p) for p in points]
    x_order = sorted(pts)
    y_order = sorted(pts, key=lambda p: p[1])
    return x_order, y_order

def in_left(p: Point, split: Point) -> bool:
    """
    Left side of the split line: x smaller than the split point's x,
    or the same x with y <= split y. Points sharing the split x are divided
    by y, so each point lands on exactly one side.
    """
    return p[0] < split[0] or (p[0] == split[0] and p[1] <= split[1])

# ---------- Base case (<= 3 points) ----------
def brute_force(pts: List[Point]) -> Pair:
    """
    Closest pair by checking every pair.
    Strict < keeps the first pair found on ties.
    """
    if len(pts) < 2:
        raise InternalInvariantError(
            f"base case needs at least 2 points, got {len(pts)}"
        )
    best: Optional[Pair] = None
    for a, b in itertools.combinations(pts, 2):
        d = euclidean_floor(a, b)
        if best is None or d < best.dist:
            best = Pair(a, b, d)
    return best

# ---------- Stripe merge ----------
def points_in_stripe(y_order: List[Point], split_x: int, delta: int) -> List[Point]:
    """Points with split_x - delta <= x <= split_x + delta, still in y-order."""
    lo, hi = split_x - delta, split_x + delta
    return [p for p in y_order if lo <= p[0] <= hi]

def closest_in_stripe(stripe: List[Point]) -> Optional[Pair]:
    """
    Closest pair inside the stripe (points sorted by y).
    Each point is compared only with the next STRIPE_LOOKAHEAD points:
    inside a 2*delta wide band, anything further along in y is at least
    delta away. Returns None if the stripe holds fewer than 2 points.
    """
    m = len(stripe)
    if m < 2:
        return None
    best: Optional[Pair] = None
    for i in range(m):
        for j in range(i + 1, min(m, i + STRIPE_LOOKAHEAD + 1)):
            d = euclidean_floor(stripe[i], stripe[j])
            if best is None or d < best.dist:
                best = Pair(stripe[i], stripe[j], d)
    return best

def combine(left_pair: Pair, right_pair: Pair,
            y_order: List[Point], split_x: int) -> Pair:
    """
    Pick the better half (left wins ties), then look for a closer pair
    that crosses the split line.
    """
    best = left_pair if left_pair.dist <= right_pair.dist else right_pair
    stripe = points_in_stripe(y_order, split_x, best.dist)
    cross = closest_in_stripe(stripe)
    if cross is not None and cross.dist < best.dist:
        return cross
    return best

# ---------- Recursion ----------
def closest_pair_rec(x_order: List[Point], y_order: List[Point],
                     left: int, right: int) -> Pair:
    """
    Closest pair among x_order[left..right] (inclusive).
    y_order holds exactly those points, sorted by y.
      - Divide: split at the middle index of the x-order range
      - Conquer: recurse on [left, mid] and [mid + 1, right]
      - Combine: better half + stripe scan around the split line
    """
    size = right - left + 1
    if len(y_order) != size:
        raise InternalInvariantError(
            f"partition [{left}, {right}] has {size} points "
            f"but its y-order list has {len(y_order)}"
        )
    if size <= 3:
        return brute_force(x_order[left:right + 1])

    mid = left + (right - left) // 2
    split = x_order[mid]
    y_left = [p for p in y_order if in_left(p, split)]
    y_right = [p for p in y_order if not in_left(p, split)]

    left_pair = closest_pair_rec(x_order, y_left, left, mid)
    right_pair = closest_pair_rec(x_order, y_right, mid + 1, right)
    return combine(left_pair, right_pair, y_order, split[0])

# ---------- Entry points ----------
def closest_pair(points: Iterable[Point]) -> Pair:
    """
    Closest pair (floor Euclidean distance) of a set of unique points.
    The points are assumed to be unique; this is not checked here.
    """
    x_order, y_order = dual_order(points)
    if len(x_order) < 2:
        raise InputError(f"at least 2 points are required, got {len(x_order)}")
    logger.debug("closest pair over %d points", len(x_order))
    return closest_pair_rec(x_order, y_order, 0, len(x_order) - 1)

def max_square_side(points: Iterable[Point]) -> int:
    """Maximum side of non-overlapping squares centered on every point."""
    pair = closest_pair(points)
    logger.debug("closest pair %s - %s (distance %d)", pair.p, pair.q, pair.dist)
    return square_side(pair)

def closest_pair_brute_force(points: Iterable[Point]) -> Pair:
    """O(n^2) reference: every pair in input order, first minimum wins."""
    pts = [as_point(p) for p in points]
    if len(pts) < 2:
        raise InputError(f"at least 2 points are required, got {len(pts)}")
    return brute_force(pts)

def solve(source) -> int:
    """Read a point file (or stream) and return the maximum square side."""
    from points_io import load_points
    return max_square_side(load_points(source))


def main(argv: Optional[List[str]] = None) -> int:
    from side_length_config import Config, configure_logging

    parser = argparse.ArgumentParser(
        description="Maximum side of non-overlapping squares centered on points.",
    )
    parser.add_argument("input", type=Path,
                        help="Point file: N, then N lines of 'x y'.")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML config file (defaults to side_length_config.yaml).")
    parser.add_argument("--plot", type=Path, default=None,
                        help="Also save a figure of the points and their squares.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging.")
    args = parser.parse_args(argv)

    try:
        cfg = Config(args.config)
    except InputError as e:
        configure_logging(verbose=args.verbose)
        logger.error("Invalid config: %s", e)
        return 1
    configure_logging(cfg, verbose=args.verbose)

    try:
        from points_io import load_points
        points = load_points(args.input)
        side = max_square_side(points)
        print(side)
        if args.plot is not None:
            from side_length_experiment import plot_squares
            plot_squares(points, side, path=args.plot, cfg=cfg)
    except InputError as e:
        logger.error("Invalid input: %s", e)
        return 1
    except Exception as e:
        logger.exception("An error occurred: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
