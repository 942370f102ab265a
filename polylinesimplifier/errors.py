"""
Exceptions raised by the polyline simplifier.

Per-polyline failures derive from SimplificationError so batch workers can
record them without stopping the rest of their index range.
"""


class PolylineSimplifierError(Exception):
    """Base class for all package errors."""


class SimplificationError(PolylineSimplifierError):
    """A single polyline could not be simplified."""


class InsufficientInputError(SimplificationError, ValueError):
    """Raised when a polyline has fewer than 2 points."""

    def __init__(self, point_count: int):
        self.point_count = point_count
        super().__init__(
            f"Not enough points to simplify: got {point_count}, need at least 2"
        )


class MalformedPolylineError(SimplificationError, ValueError):
    """Raised when a polyline cannot be read as an (n, 2) array of numbers."""


class AssemblyInvariantViolation(SimplificationError, RuntimeError):
    """Raised when the assembled simplification has fewer than 2 points."""


class InvalidWorkerCountError(PolylineSimplifierError, ValueError):
    """Raised when the worker count is not one of the supported values."""


class InvalidToleranceError(PolylineSimplifierError, ValueError):
    """Raised for a negative or NaN tolerance."""


class BatchSimplificationError(PolylineSimplifierError):
    """
    Raised after a batch run in which at least one polyline failed.

    The complete BatchResult is attached as ``result``; slots of polylines
    that succeeded are filled in as usual.
    """

    def __init__(self, result):
        self.result = result
        failed = sorted(result.errors)
        super().__init__(
            f"{len(failed)} of {len(result.polylines)} polylines failed "
            f"(indices: {failed})"
        )


class PolylineParseError(PolylineSimplifierError, ValueError):
    """Raised for a malformed line in a polyline text file."""

    def __init__(self, message: str, line_number: int):
        self.line_number = line_number
        super().__init__(f"line {line_number}: {message}")
