"""
Reading and writing polylines in the plain text format.

One polyline per line; points are separated by whitespace and each point is
written as ``x,y``::

    0,0 1,0.1 2,-0.1 3,0
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from .errors import PolylineParseError

COORDINATE_DIGITS = 16


def parse_polyline(line: str, line_number: int = 1) -> np.ndarray:
    """
    Parses one line of text into an (n, 2) array.

    A blank line gives an empty (0, 2) array.

    Raises:
    -------
    PolylineParseError
        If a token is not an ``x,y`` pair of numbers
    """
    points = []
    for token in line.split():
        parts = token.split(",")
        if len(parts) != 2:
            raise PolylineParseError(f"expected 'x,y', got {token!r}", line_number)
        try:
            points.append((float(parts[0]), float(parts[1])))
        except ValueError:
            raise PolylineParseError(f"invalid coordinate in {token!r}", line_number)
    return np.array(points, dtype=float).reshape(-1, 2)


def read_polylines(path: Union[str, Path]) -> List[np.ndarray]:
    """
    Reads a polyline text file.

    Parameters:
    -----------
    path : str or Path
        File to read

    Returns:
    --------
    list[numpy.ndarray]
        One array per line of the file, in file order
    """
    with open(path, "r") as f:
        return [
            parse_polyline(line, line_number)
            for line_number, line in enumerate(f, start=1)
        ]


def format_points(points: Optional[Sequence[Sequence[float]]]) -> str:
    if points is None:
        return "<failed>"
    return " ".join(
        f"({x:.{COORDINATE_DIGITS}f}, {y:.{COORDINATE_DIGITS}f})"
        for x, y, *_ in points
    )


def format_results(
    originals: Iterable[Sequence[Sequence[float]]],
    simplified: Iterable[Optional[Sequence[Sequence[float]]]],
) -> str:
    """
    Renders each original polyline next to its simplified version.

    Failed polylines (None) are shown as ``<failed>``.
    """
    blocks = []
    for original, result in zip(originals, simplified):
        blocks.append(
            "Polyline:\n"
            f"{format_points(original)}\n"
            "Simplified:\n"
            f"{format_points(result)}\n"
        )
    return "\n".join(blocks)
