import argparse
import sys
from typing import List, Optional

from .batch_operations import simplify_batch
from .chunk_processing import SUPPORTED_WORKER_COUNTS
from .errors import PolylineParseError
from .polyline_io import format_results, read_polylines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polylinesimplifier",
        description="Simplify polylines with the Ramer-Douglas-Peucker algorithm.",
    )
    parser.add_argument("input", help="Text file with one polyline per line (x,y x,y ...)")
    parser.add_argument("epsilon", type=float, help="Simplification tolerance (>= 0)")
    parser.add_argument(
        "--threads",
        type=int,
        choices=SUPPORTED_WORKER_COUNTS,
        default=1,
        help="Number of worker threads (default: 1)",
    )
    parser.add_argument(
        "--print-results",
        action="store_true",
        help="Print every polyline with its simplified version",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        polylines = read_polylines(args.input)
    except (OSError, PolylineParseError) as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 2

    try:
        result = simplify_batch(polylines, epsilon=args.epsilon, worker_count=args.threads)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for report in result.reports:
        print(
            f"Time for calculations = {report.elapsed:13.6f} sec "
            f"for thread {report.worker_id}"
        )

    if args.print_results:
        print(format_results(polylines, result.polylines))

    print(f"The number of lines in file are {len(polylines)}")
    print(f"Simplified {len(polylines) - len(result.errors)} polylines")

    for index in sorted(result.errors):
        print(f"Polyline {index}: {result.errors[index]}", file=sys.stderr)

    return 0 if result.ok else 1
