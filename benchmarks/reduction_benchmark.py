"""Benchmark the point-budget reduction engine with large tracks."""

from __future__ import annotations

import argparse
import math
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from gpx_tools.models import (  # noqa: E402
    SimplificationMethod,
    SolverConfig,
    Track,
    TrackPoint,
    TrackSegment,
)
from gpx_tools.services.reduction_service import reduce_track  # noqa: E402


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    point_count: int
    method: str
    iterations: int
    final_points: int
    solver_iterations: int
    mean_ms: float
    worst_ms: float


def _build_track(point_count: int, segment_count: int) -> Track:
    """Generate a wavy lat/lon track split into equal segments."""

    base_lat = 37.0
    base_lon = -122.0
    step_deg = 1.2e-5
    per_segment = max(point_count // segment_count, 2)
    segments: List[TrackSegment] = []
    for seg_index in range(segment_count):
        points = []
        for idx in range(per_segment):
            offset = seg_index * per_segment + idx
            points.append(
                TrackPoint(
                    longitude=base_lon + offset * step_deg,
                    latitude=base_lat + 4e-4 * math.sin(offset / 25.0),
                )
            )
        segments.append(TrackSegment(points=points))
    return Track(segments=segments, name="benchmark")


def run_benchmark(
    point_count: int,
    max_points: int,
    iterations: int,
    method: SimplificationMethod,
    segment_count: int = 4,
) -> BenchmarkSummary:
    """Reduce a synthetic track repeatedly and return aggregated timings."""

    if point_count <= max_points:
        raise ValueError("point_count must exceed max_points")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    track = _build_track(point_count, segment_count)
    config = SolverConfig.from_method(max_points, method)
    durations: List[float] = []
    result = None
    for _ in range(iterations):
        start = time.perf_counter()
        result = reduce_track(track, config)
        durations.append(time.perf_counter() - start)
    assert result is not None and result.search is not None

    return BenchmarkSummary(
        point_count=track.point_count,
        method=method.value,
        iterations=iterations,
        final_points=result.final_points,
        solver_iterations=result.search.iterations,
        mean_ms=statistics.fmean(durations) * 1000.0,
        worst_ms=max(durations) * 1000.0,
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, object]:
    """Return a JSON-friendly representation of the benchmark summary."""

    return {
        "point_count": summary.point_count,
        "method": summary.method,
        "iterations": summary.iterations,
        "final_points": summary.final_points,
        "solver_iterations": summary.solver_iterations,
        "mean_ms": summary.mean_ms,
        "worst_ms": summary.worst_ms,
    }


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the benchmark utility."""

    parser = argparse.ArgumentParser(
        description="Benchmark the epsilon search on a large synthetic track",
    )
    parser.add_argument("--points", type=int, default=20000)
    parser.add_argument("--max-points", type=int, default=500)
    parser.add_argument("--iterations", type=int, default=5)
    parser.add_argument(
        "--algorithm",
        choices=[method.value for method in SimplificationMethod],
        default=SimplificationMethod.RDP.value,
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    args = _parse_args()
    summary = run_benchmark(
        args.points,
        args.max_points,
        args.iterations,
        SimplificationMethod(args.algorithm),
    )
    for key, value in _format_summary(summary).items():
        if isinstance(value, float):
            print(f"{key}: {value:.3f}")
        else:
            print(f"{key}: {value}")


if __name__ == "__main__":
    main()
