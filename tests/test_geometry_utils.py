import math

import numpy as np
import pytest

from polylinesimplifier.geometry_utils import (
    hausdorff_distance,
    perpendicular_distance,
    perpendicular_distances,
)


def test_distance_to_horizontal_line():
    assert perpendicular_distance((3.0, 4.0), (0.0, 0.0), (10.0, 0.0)) == pytest.approx(4.0)


def test_distance_uses_infinite_line_not_segment():
    # Projection falls well beyond line_end
    assert perpendicular_distance((100.0, 2.0), (0.0, 0.0), (1.0, 0.0)) == pytest.approx(2.0)


def test_distance_to_diagonal_line():
    d = perpendicular_distance((0.0, 1.0), (0.0, 0.0), (1.0, 1.0))
    assert d == pytest.approx(math.sqrt(2) / 2)


def test_point_on_line_has_zero_distance():
    assert perpendicular_distance((2.0, 2.0), (0.0, 0.0), (5.0, 5.0)) == pytest.approx(0.0, abs=1e-12)


def test_coincident_line_points_fall_back_to_point_distance():
    d = perpendicular_distance((3.0, 4.0), (1.0, 1.0), (1.0, 1.0))
    assert d == pytest.approx(math.hypot(2.0, 3.0))


def test_very_short_and_very_long_lines_are_stable():
    short = perpendicular_distance((0.5e-12, 1.0), (0.0, 0.0), (1e-12, 0.0))
    long = perpendicular_distance((0.5e12, 1.0), (0.0, 0.0), (1e12, 0.0))
    assert short == pytest.approx(1.0)
    assert long == pytest.approx(1.0)


def test_vectorised_matches_scalar(rng):
    points = rng.normal(size=(50, 2)) * 10
    start, end = np.array([-3.0, 1.0]), np.array([4.0, 7.5])
    expected = [perpendicular_distance(p, start, end) for p in points]
    np.testing.assert_allclose(perpendicular_distances(points, start, end), expected)


def test_vectorised_coincident_line_points():
    points = np.array([[3.0, 4.0], [1.0, 1.0]])
    np.testing.assert_allclose(
        perpendicular_distances(points, (1.0, 1.0), (1.0, 1.0)),
        [math.hypot(2.0, 3.0), 0.0],
    )


def test_hausdorff_distance_is_symmetric():
    a = np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]])
    b = np.array([[0.0, 0.0], [1.0, 1.5], [2.0, 0.0]])
    assert hausdorff_distance(a, b) == pytest.approx(1.5)
    assert hausdorff_distance(b, a) == pytest.approx(1.5)
