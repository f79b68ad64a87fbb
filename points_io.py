"""
Point files: reading (with validation), writing and random generation.

The format is:
N
x0 y0
x1 y1
...
Tokens are whitespace separated, so line breaks do not matter.
"""

import logging
from pathlib import Path
from typing import List, Set, TextIO, Union

import numpy as np

from max_side_length import InputError, Point

logger = logging.getLogger(__name__)


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InputError(f"{what} must be an integer, got {token!r}") from None


def parse_points(text: str) -> List[Point]:
    """
    Parse and validate the contents of a point file.
    Rejects: non-integer tokens, a missing or negative count, too few
    coordinates, fewer than 2 points, and repeated points.
    """
    tokens = text.split()
    if not tokens:
        raise InputError("input is empty")

    n = _to_int(tokens[0], "point count")
    if n < 0:
        raise InputError(f"point count must be non-negative, got {n}")
    if n < 2:
        raise InputError(f"at least 2 points are required, got {n}")

    coords = tokens[1:]
    if len(coords) < 2 * n:
        raise InputError(
            f"expected {2 * n} coordinates for {n} points, got {len(coords)}"
        )
    if len(coords) > 2 * n:
        logger.warning("Ignoring %d trailing token(s)", len(coords) - 2 * n)

    points: List[Point] = []
    seen: Set[Point] = set()
    for i in range(n):
        p = (_to_int(coords[2 * i], f"x of point {i}"),
             _to_int(coords[2 * i + 1], f"y of point {i}"))
        if p in seen:
            raise InputError(f"duplicate point {p} (point {i})")
        seen.add(p)
        points.append(p)
    return points


def load_points(source: Union[str, Path, TextIO]) -> List[Point]:
    """Read a point file from a path or an open text stream."""
    if hasattr(source, "read"):
        try:
            text = source.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"cannot read input stream: {e}") from e
        return parse_points(text)

    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise InputError(f"input file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"cannot read input file {path}: {e}") from e
    points = parse_points(text)
    logger.info("Loaded %d points from %s", len(points), path)
    return points


def write_points(points: List[Point], path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"{len(points)}\n")
        for x, y in points:
            f.write(f"{x} {y}\n")


def generate_points(n: int, rng: np.random.Generator,
                    low: int = -10_000_000, high: int = 10_000_000) -> List[Point]:
    """
    n unique integer points, coordinates uniform in [low, high).
    Draws in batches and drops repeats until n distinct points are collected.
    """
    span = high - low
    if n < 0 or span <= 0 or n > span * span:
        raise InputError(f"cannot draw {n} unique points from [{low}, {high})^2")

    points: List[Point] = []
    seen: Set[Point] = set()
    while len(points) < n:
        batch = rng.integers(low, high, size=(n - len(points), 2))
        for x, y in batch.tolist():
            p = (x, y)
            if p not in seen:
                seen.add(p)
                points.append(p)
    return points
