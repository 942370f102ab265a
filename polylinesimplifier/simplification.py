"""
Simplification algorithms for polylines.

Contains the Ramer-Douglas-Peucker algorithm implementation for line simplification.
"""

import math
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import (
    AssemblyInvariantViolation,
    InsufficientInputError,
    InvalidToleranceError,
    MalformedPolylineError,
)
from .geometry_utils import perpendicular_distances

PointLike = Union[Sequence[float], np.ndarray]


def validate_tolerance(epsilon: float) -> float:
    """
    Checks that a simplification tolerance is a non-negative number.

    Parameters:
    -----------
    epsilon : float
        Tolerance to check

    Returns:
    --------
    float
        The tolerance as a float

    Raises:
    -------
    InvalidToleranceError
        If epsilon is negative, NaN or not a number
    """
    try:
        epsilon = float(epsilon)
    except (TypeError, ValueError):
        raise InvalidToleranceError(f"Tolerance must be a number, got {epsilon!r}")
    if math.isnan(epsilon) or epsilon < 0:
        raise InvalidToleranceError(f"Tolerance must be non-negative, got {epsilon}")
    return epsilon


def _max_deviation(
    points: np.ndarray,
    start: int,
    end: int,
    distance_func: Optional[Callable],
) -> Tuple[float, int]:
    """
    Finds the interior point of points[start..end] furthest from the chord.

    Returns (max_distance, index). The first index reaching the maximum wins.
    NaN distances are skipped. With no interior points, or only NaN
    distances, the distance is 0 and the index is -1.
    """
    if end - start < 2:
        return 0.0, -1

    if distance_func is None:
        distances = perpendicular_distances(
            points[start + 1 : end, :2], points[start, :2], points[end, :2]
        )
        if np.all(np.isnan(distances)):
            return 0.0, -1
        offset = int(np.nanargmax(distances))
        return float(distances[offset]), start + 1 + offset

    max_distance = 0.0
    index_of_furthest = -1
    for i in range(start + 1, end):
        distance = distance_func(points[i, :2], points[start, :2], points[end, :2])
        if distance > max_distance:
            index_of_furthest = i
            max_distance = distance
    return float(max_distance), index_of_furthest


def _ramer_douglas_peucker(
    points: np.ndarray, epsilon: float, distance_func: Optional[Callable] = None
) -> np.ndarray:
    """
    Ramer-Douglas-Peucker simplification of an (n, k) array, k >= 2.

    The divide-and-conquer recursion is run on an explicit stack of
    (start, end) index ranges. A range keeps only its endpoints unless its
    furthest interior point deviates by more than epsilon, in which case that
    point is kept and both halves are pushed. The kept indices, in order, are
    the concatenation of the recursive halves with the shared split point
    counted once.

    Parameters:
    -----------
    points : numpy.ndarray
        Array of points to simplify, at least 2 rows
    epsilon : float
        Simplification threshold
    distance_func : function, optional
        Scalar point-to-line distance. Defaults to the vectorised
        perpendicular distance.

    Returns:
    --------
    numpy.ndarray
        Simplified points
    """
    point_count = points.shape[0]
    keep = np.zeros(point_count, dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, point_count - 1)]
    while stack:
        start, end = stack.pop()
        max_distance, split_index = _max_deviation(points, start, end, distance_func)

        if max_distance > epsilon:
            keep[split_index] = True
            # Second half first so the first half is processed next
            stack.append((split_index, end))
            stack.append((start, split_index))

    simplified = points[keep]
    # Only reachable with a single-row array, which callers reject first
    if simplified.shape[0] < 2:
        raise AssemblyInvariantViolation(
            f"Problem assembling output: {simplified.shape[0]} point(s) kept "
            f"from {point_count}"
        )
    return simplified


def _as_point_array(points) -> np.ndarray:
    """Converts input points to a float array, checking there are at least 2."""
    try:
        points_array = np.asarray(points, dtype=float)
    except (TypeError, ValueError) as e:
        raise MalformedPolylineError(f"Points are not a numeric array: {e}")
    point_count = points_array.shape[0] if points_array.ndim > 0 else 0
    if point_count < 2:
        raise InsufficientInputError(point_count)
    if points_array.ndim != 2 or points_array.shape[1] < 2:
        raise MalformedPolylineError(
            f"Points must have shape (n, 2) or wider, got {points_array.shape}"
        )
    return points_array


def simplify_with_rdp(
    points: Union[np.ndarray, Sequence[PointLike]],
    epsilon: float = 0.0,
    distance_func: Optional[Callable] = None,
) -> Union[np.ndarray, List[Tuple[float, ...]]]:
    """
    Simplifies a given array of points using Ramer-Douglas-Peucker algorithm.

    The first and last points are always kept and the output is an ordered
    subsequence of the input. Only the first two coordinates take part in
    distance calculations; extra columns are carried through.

    Parameters:
    -----------
    points : numpy.ndarray or list of points
        Points to simplify
    epsilon : float
        Simplification threshold (higher = more simplification)
    distance_func : function, optional
        Scalar function (point, line_start, line_end) -> distance. Defaults to
        the perpendicular distance to the line through line_start and line_end.

    Returns:
    --------
    numpy.ndarray or list of tuples
        Simplified points in the same format as input (ndarray, or a list of
        coordinate tuples for any other sequence)

    Raises:
    -------
    InsufficientInputError
        If fewer than 2 points are given
    MalformedPolylineError
        If the points are ragged or not 2-D coordinates
    InvalidToleranceError
        If epsilon is negative or NaN
    """
    epsilon = validate_tolerance(epsilon)
    points_array = _as_point_array(points)

    simplified_array = _ramer_douglas_peucker(points_array, epsilon, distance_func)

    if isinstance(points, np.ndarray):
        return simplified_array
    return [tuple(point) for point in simplified_array.tolist()]
