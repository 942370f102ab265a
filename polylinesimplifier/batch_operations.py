import warnings
from dataclasses import dataclass, field
from functools import partial
from multiprocessing.pool import ThreadPool
from typing import Any, Dict, List, Optional, Sequence

from .chunk_processing import (
    WorkerReport,
    partition_indices,
    process_chunk,
    validate_worker_count,
)
from .errors import BatchSimplificationError
from .simplification import validate_tolerance

ERROR_MODES = ("raise", "coerce")


@dataclass
class BatchResult:
    """
    Index-aligned result of a batch run.

    Attributes:
    -----------
    polylines : list
        Simplified polylines; None where simplification failed.
    errors : dict
        Failed index -> exception raised for that polyline.
    reports : list[WorkerReport]
        One report per worker, in worker order.
    """

    polylines: List[Optional[Any]]
    errors: Dict[int, Exception] = field(default_factory=dict)
    reports: List[WorkerReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def simplify_batch(
    polylines: Sequence[Any],
    epsilon: float = 0.0,
    worker_count: int = 1,
) -> BatchResult:
    """
    Simplifies every polyline in a batch across a fixed pool of threads.

    The batch is split into one contiguous index range per worker. Each
    worker writes only to its own slots of a pre-sized output list, so no
    locking is needed; results are read only after all workers have joined.

    Parameters:
    -----------
    polylines : sequence
        Batch of polylines (arrays or sequences of points). Not modified.
    epsilon : float, optional
        Simplification tolerance shared by all polylines. Defaults to 0.0.
    worker_count : int, optional
        Number of worker threads, one of 1, 2 or 4. Defaults to 1.

    Returns:
    --------
    BatchResult
        Simplified polylines in input order, per-index errors and per-worker
        reports.

    Raises:
    -------
    InvalidWorkerCountError
        If worker_count is unsupported. Raised before any work is scheduled.
    InvalidToleranceError
        If epsilon is negative or NaN.
    """
    worker_count = validate_worker_count(worker_count)
    epsilon = validate_tolerance(epsilon)

    output: List[Optional[Any]] = [None] * len(polylines)
    ranges = partition_indices(len(polylines), worker_count)

    if worker_count == 1:
        reports = [process_chunk(0, ranges[0], polylines, output, epsilon)]
    else:
        with ThreadPool(processes=worker_count) as pool:
            process_chunk_partial = partial(
                process_chunk,
                polylines=polylines,
                output=output,
                epsilon=epsilon,
            )
            # map returns once every worker has finished its range
            reports = pool.starmap(process_chunk_partial, enumerate(ranges))

    errors: Dict[int, Exception] = {}
    for report in reports:
        errors.update(report.errors)

    return BatchResult(polylines=output, errors=errors, reports=list(reports))


def run_batch(
    polylines: Sequence[Any],
    epsilon: float = 0.0,
    worker_count: int = 1,
    errors: str = "raise",
) -> List[Optional[Any]]:
    """
    Simplifies a batch of polylines and returns them in input order.

    Parameters:
    -----------
    polylines : sequence
        Batch of polylines.
    epsilon : float, optional
        Simplification tolerance. Defaults to 0.0.
    worker_count : int, optional
        Number of worker threads, one of 1, 2 or 4. Defaults to 1.
    errors : {"raise", "coerce"}, optional
        "raise" raises BatchSimplificationError once all workers are done if
        any polyline failed; the full BatchResult is attached to it.
        "coerce" returns None for failed polylines and emits a warning.
        Defaults to "raise".

    Returns:
    --------
    list
        Simplified polylines, index-aligned with the input.
    """
    if errors not in ERROR_MODES:
        raise ValueError(f"errors must be one of {ERROR_MODES}, got {errors!r}")

    result = simplify_batch(polylines, epsilon=epsilon, worker_count=worker_count)

    if not result.ok:
        if errors == "raise":
            raise BatchSimplificationError(result)
        warnings.warn(
            f"Failed to simplify {len(result.errors)} polyline(s) at indices "
            f"{sorted(result.errors)}. Returning None for these."
        )

    return result.polylines
