import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, MutableSequence, Sequence, Tuple

from .errors import InvalidWorkerCountError, SimplificationError
from .simplification import simplify_with_rdp

SUPPORTED_WORKER_COUNTS = (1, 2, 4)


@dataclass
class WorkerReport:
    """Outcome of one worker's pass over its index range."""

    worker_id: int
    start: int
    end: int
    processed: int = 0
    errors: Dict[int, Exception] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def failed(self) -> List[int]:
        return sorted(self.errors)


def validate_worker_count(worker_count: int) -> int:
    """
    Checks that the worker count is one of SUPPORTED_WORKER_COUNTS.

    Raises:
    -------
    InvalidWorkerCountError
        If it is not
    """
    if isinstance(worker_count, bool) or worker_count not in SUPPORTED_WORKER_COUNTS:
        raise InvalidWorkerCountError(
            f"Worker count must be one of {SUPPORTED_WORKER_COUNTS}, got {worker_count!r}"
        )
    return int(worker_count)


def get_chunk_size(item_count: int, num_workers: int) -> int:
    """
    Calculate the base chunk size for a static partition.

    Parameters:
    -----------
    item_count : int
        Total number of items to be processed.
    num_workers : int
        Number of workers sharing the items.

    Returns:
    --------
    int
        item_count // num_workers. Items beyond num_workers * chunk_size are
        the remainder handed to the last worker.
    """
    return item_count // num_workers


def partition_indices(total_count: int, worker_count: int) -> List[Tuple[int, int]]:
    """
    Splits [0, total_count) into one contiguous half-open range per worker.

    Worker i gets [i * chunk_size, (i + 1) * chunk_size). The remainder left
    by integer division is appended to the last worker's range, so the ranges
    cover every index exactly once for any worker count.

    Parameters:
    -----------
    total_count : int
        Number of items in the batch.
    worker_count : int
        Number of workers, one of SUPPORTED_WORKER_COUNTS.

    Returns:
    --------
    list[tuple[int, int]]
        worker_count (start, end) ranges in worker order. Ranges may be empty
        when there are fewer items than workers.
    """
    worker_count = validate_worker_count(worker_count)
    if total_count < 0:
        raise ValueError(f"Item count must be non-negative, got {total_count}")

    chunk_size = get_chunk_size(total_count, worker_count)
    ranges = [(i * chunk_size, (i + 1) * chunk_size) for i in range(worker_count)]

    # Remainder goes to the last worker
    last_start, _ = ranges[-1]
    ranges[-1] = (last_start, total_count)

    return ranges


def process_chunk(
    worker_id: int,
    index_range: Tuple[int, int],
    polylines: Sequence[Any],
    output: MutableSequence[Any],
    epsilon: float,
) -> WorkerReport:
    """
    Simplifies polylines[start:end] into the matching slots of output.

    Only slots inside index_range are written. A polyline that cannot be
    simplified leaves its slot as is and its exception is recorded in the
    report under its index; the remaining indices are still processed.

    Parameters:
    -----------
    worker_id : int
        Identifier reported back in the WorkerReport.
    index_range : tuple[int, int]
        Half-open range of batch indices owned by this worker.
    polylines : sequence
        Input batch, read only.
    output : list
        Pre-sized output batch, index-aligned with polylines.
    epsilon : float
        Simplification tolerance.

    Returns:
    --------
    WorkerReport
        Counts, failures and wall time for this range.
    """
    start, end = index_range
    report = WorkerReport(worker_id=worker_id, start=start, end=end)
    started = time.perf_counter()

    for k in range(start, end):
        try:
            output[k] = simplify_with_rdp(polylines[k], epsilon=epsilon)
        except SimplificationError as e:
            report.errors[k] = e
        report.processed += 1

    report.elapsed = time.perf_counter() - started
    return report
