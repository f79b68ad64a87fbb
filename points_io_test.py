# PyTest unit tests for points_io.py

import io
import logging

import numpy as np
import pytest

from max_side_length import InputError
import points_io as pio


def test_parse_simple():
    assert pio.parse_points("3\n0 0\n1 5\n-2 7\n") == [(0, 0), (1, 5), (-2, 7)]

def test_parse_ignores_line_layout():
    assert pio.parse_points("2 0 0\n\n 3   4") == [(0, 0), (3, 4)]

def test_parse_trailing_tokens_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="points_io"):
        assert pio.parse_points("2\n0 0\n3 4\n9 9\n") == [(0, 0), (3, 4)]
    assert "trailing" in caplog.text

@pytest.mark.parametrize("text", [
    "",                       # empty
    "   \n ",                 # whitespace only
    "two\n0 0\n1 1\n",        # count not an integer
    "-1\n",                   # negative count
    "0\n",                    # no points
    "1\n5 5\n",               # a single point
    "3\n0 0\n1 1\n",          # too few coordinates
    "2\n0 0\n1 1.5\n",        # non-integer coordinate
    "2\n0 0\n0 0\n",          # duplicate
])
def test_parse_rejects(text):
    with pytest.raises(InputError):
        pio.parse_points(text)

def test_duplicate_message_names_point():
    with pytest.raises(InputError, match=r"\(4, -1\)"):
        pio.parse_points("3\n4 -1\n0 0\n4 -1\n")

def test_load_from_path_and_stream(tmp_path):
    path = tmp_path / "p.txt"
    path.write_text("2\n1 2\n3 4\n")
    assert pio.load_points(path) == [(1, 2), (3, 4)]
    assert pio.load_points(str(path)) == [(1, 2), (3, 4)]
    assert pio.load_points(io.StringIO("2\n1 2\n3 4\n")) == [(1, 2), (3, 4)]

def test_load_missing_file(tmp_path):
    with pytest.raises(InputError) as exc:
        pio.load_points(tmp_path / "missing.txt")
    assert isinstance(exc.value.__cause__, FileNotFoundError)

def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "p.txt"
    path.write_bytes(b"2\n0 0\n3 \xff4\n")
    with pytest.raises(InputError) as exc:
        pio.load_points(path)
    assert isinstance(exc.value.__cause__, UnicodeDecodeError)

def test_load_directory(tmp_path):
    with pytest.raises(InputError) as exc:
        pio.load_points(tmp_path)
    assert isinstance(exc.value.__cause__, OSError)

def test_load_unreadable_stream(tmp_path):
    path = tmp_path / "p.txt"
    path.write_bytes(b"2\n0 0\n3 \xff4\n")
    with open(path, encoding="utf-8") as f:
        with pytest.raises(InputError):
            pio.load_points(f)

def test_write_then_load(tmp_path):
    P = [(0, 0), (-7, 12), (1_000_000, -3)]
    path = tmp_path / "sub" / "dir" / "p.txt"
    pio.write_points(P, path)
    assert path.read_text().splitlines()[0] == "3"
    assert pio.load_points(path) == P

@pytest.mark.parametrize("n", [0, 1, 2, 50, 500])
def test_generate_unique_points(n):
    P = pio.generate_points(n, np.random.default_rng(n), -100, 100)
    assert len(P) == n
    assert len(set(P)) == n
    assert all(-100 <= x < 100 and -100 <= y < 100 for x, y in P)
    assert all(type(x) is int and type(y) is int for x, y in P)

def test_generate_fills_small_range():
    # every point of a 3x3 grid
    P = pio.generate_points(9, np.random.default_rng(0), 0, 3)
    assert set(P) == {(x, y) for x in range(3) for y in range(3)}

def test_generate_is_reproducible():
    a = pio.generate_points(100, np.random.default_rng(5))
    b = pio.generate_points(100, np.random.default_rng(5))
    assert a == b

def test_generate_impossible_range():
    with pytest.raises(InputError):
        pio.generate_points(10, np.random.default_rng(0), 0, 3)
