"""
polylinesimplifier: Ramer-Douglas-Peucker simplification of polylines, with
batches split across a fixed pool of worker threads.
"""

from .batch_operations import BatchResult, run_batch, simplify_batch
from .chunk_processing import SUPPORTED_WORKER_COUNTS, WorkerReport, partition_indices
from .errors import (
    AssemblyInvariantViolation,
    BatchSimplificationError,
    InsufficientInputError,
    InvalidToleranceError,
    InvalidWorkerCountError,
    MalformedPolylineError,
    PolylineParseError,
    PolylineSimplifierError,
    SimplificationError,
)
from .gdf_operations import simplify_geodataframe
from .geometry_utils import perpendicular_distance
from .simplification import simplify_with_rdp

simplify = simplify_with_rdp

__version__ = "0.1.0"

__all__ = [
    "AssemblyInvariantViolation",
    "BatchResult",
    "BatchSimplificationError",
    "InsufficientInputError",
    "InvalidToleranceError",
    "InvalidWorkerCountError",
    "MalformedPolylineError",
    "PolylineParseError",
    "PolylineSimplifierError",
    "SUPPORTED_WORKER_COUNTS",
    "SimplificationError",
    "WorkerReport",
    "partition_indices",
    "perpendicular_distance",
    "run_batch",
    "simplify",
    "simplify_batch",
    "simplify_geodataframe",
    "simplify_with_rdp",
]
