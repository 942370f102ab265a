import math

import numpy as np
from scipy.spatial.distance import directed_hausdorff


def perpendicular_distance(
    point: np.ndarray, line_start: np.ndarray, line_end: np.ndarray
) -> float:
    """
    Calculates the perpendicular distance from a point to the infinite line
    through two other points.

    The point is projected onto the unit direction vector of the line and the
    magnitude of the residual is returned. When ``line_start`` and
    ``line_end`` coincide the direction cannot be normalised, and the result
    is the distance from ``line_start`` to ``point``.

    Parameters:
    -----------
    point : array-like
        The point to calculate distance from
    line_start : array-like
        First point on the line
    line_end : array-like
        Second point on the line

    Returns:
    --------
    float
        Non-negative distance from point to line
    """
    px, py = float(point[0]), float(point[1])
    sx, sy = float(line_start[0]), float(line_start[1])
    dx = float(line_end[0]) - sx
    dy = float(line_end[1]) - sy

    # Normalise
    magnitude = math.hypot(dx, dy)
    if magnitude > 0.0:
        dx /= magnitude
        dy /= magnitude

    pvx = px - sx
    pvy = py - sy

    # Remove the component along the line
    projection = dx * pvx + dy * pvy
    residual_x = pvx - projection * dx
    residual_y = pvy - projection * dy

    return math.hypot(residual_x, residual_y)


def perpendicular_distances(
    points: np.ndarray, line_start: np.ndarray, line_end: np.ndarray
) -> np.ndarray:
    """
    Vectorised form of perpendicular_distance for an (m, 2) array of points.

    Parameters:
    -----------
    points : numpy.ndarray
        Points to measure, shape (m, 2)
    line_start : array-like
        First point on the line
    line_end : array-like
        Second point on the line

    Returns:
    --------
    numpy.ndarray
        Distances, shape (m,)
    """
    points = np.asarray(points, dtype=float)[:, :2]
    line_start = np.asarray(line_start, dtype=float)[:2]
    direction = np.asarray(line_end, dtype=float)[:2] - line_start

    magnitude = np.hypot(direction[0], direction[1])
    if magnitude > 0.0:
        direction = direction / magnitude

    point_vectors = points - line_start
    projections = point_vectors[:, 0] * direction[0] + point_vectors[:, 1] * direction[1]
    residuals = point_vectors - projections[:, np.newaxis] * direction

    return np.hypot(residuals[:, 0], residuals[:, 1])


def hausdorff_distance(coords_1: np.ndarray, coords_2: np.ndarray) -> float:
    """Symmetric Hausdorff distance between two coordinate arrays."""
    coords_1 = np.asarray(coords_1, dtype=float)[:, :2]
    coords_2 = np.asarray(coords_2, dtype=float)[:, :2]

    forward = directed_hausdorff(coords_1, coords_2)[0]
    backward = directed_hausdorff(coords_2, coords_1)[0]

    return max(forward, backward)
