"""Track reduction service (application layer).

Applies the epsilon search to every track that exceeds the point budget and
swaps in the reassembled result. Tracks already within budget are returned
as the very same objects.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
import logging
from typing import Dict, List, Optional, Sequence

from ..config import COMPUTE_DEVIATION, MAX_WORKERS
from ..models import SolverConfig, Track
from ..reduction.adapter import to_coordinates
from ..reduction.assembly import assemble_track
from ..reduction.primitives import Primitive
from ..reduction.solver import SearchObserver, SearchResult, search_epsilon
from ..reduction.validation import max_track_deviation


@dataclass(slots=True)
class TrackReduction:
    """Outcome of reducing (or passing through) a single track."""

    track: Track
    original_points: int
    final_points: int
    search: Optional[SearchResult] = None
    max_deviation: Optional[float] = None

    @property
    def reduced(self) -> bool:
        return self.search is not None

    @property
    def budget_met(self) -> bool:
        return self.search is None or self.search.budget_met


def reduce_track(
    track: Track,
    config: SolverConfig,
    *,
    primitive: Optional[Primitive] = None,
    observer: Optional[SearchObserver] = None,
    compute_deviation: bool = False,
) -> TrackReduction:
    """Reduce one track to at most ``config.max_points`` where possible."""

    point_count = track.point_count
    if point_count <= config.max_points:
        return TrackReduction(
            track=track, original_points=point_count, final_points=point_count
        )

    coordinates = [to_coordinates(segment) for segment in track.segments]
    search = search_epsilon(
        coordinates, config, primitive=primitive, observer=observer
    )
    reduced = assemble_track(track, search.indices)
    deviation = max_track_deviation(track, reduced) if compute_deviation else None
    return TrackReduction(
        track=reduced,
        original_points=point_count,
        final_points=search.point_count,
        search=search,
        max_deviation=deviation,
    )


class ReductionService:
    def __init__(
        self,
        config: SolverConfig,
        *,
        max_workers: int | None = None,
        compute_deviation: bool | None = None,
        primitive: Optional[Primitive] = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config
        self.max_workers = MAX_WORKERS if max_workers is None else max_workers
        if self.max_workers <= 0:
            raise ValueError("max_workers must be positive")
        self.compute_deviation = (
            COMPUTE_DEVIATION if compute_deviation is None else compute_deviation
        )
        self.primitive = primitive
        self._log = logger or logging.getLogger(self.__class__.__name__)

    def process(self, tracks: Sequence[Track]) -> List[TrackReduction]:
        """Reduce every track, returning results in input order."""

        self._log.info("Found %d track(s)", len(tracks))
        if self.max_workers == 1 or len(tracks) < 2:
            return [self.reduce(track) for track in tracks]

        results: Dict[int, TrackReduction] = {}
        workers = min(self.max_workers, len(tracks))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_map: Dict[Future[TrackReduction], int] = {
                executor.submit(self.reduce, track): index
                for index, track in enumerate(tracks)
            }
            for future in as_completed(future_map):
                results[future_map[future]] = future.result()
        return [results[index] for index in range(len(tracks))]

    def reduce(self, track: Track) -> TrackReduction:
        name = track.name or ""
        max_points = self.config.max_points
        point_count = track.point_count
        if point_count <= max_points:
            self._log.info(
                "Track '%s' already has %d <= %d points.", name, point_count, max_points
            )
            return reduce_track(track, self.config)

        self._log.info("Simplifying track '%s' (%d points)...", name, point_count)
        result = reduce_track(
            track,
            self.config,
            primitive=self.primitive,
            observer=self._make_observer(name),
            compute_deviation=self.compute_deviation,
        )
        search = result.search
        if search is not None and search.budget_met:
            self._log.info(
                "Reduced track '%s' to %d points (epsilon=%g, %d iterations).",
                name,
                search.point_count,
                search.epsilon,
                search.iterations,
            )
        elif search is not None:
            self._log.warning(
                "Failed to reduce track '%s' below %d points (best %d). "
                "Consider increasing the number of iterations.",
                name,
                max_points,
                search.point_count,
            )
        if result.max_deviation is not None:
            self._log.info("Max deviation for '%s': %g", name, result.max_deviation)
        return result

    def _make_observer(self, name: str) -> SearchObserver:
        def _observe(iteration: int, epsilon: float, point_count: int) -> None:
            self._log.debug(
                "  [%s %d] %d points for epsilon=%g", name, iteration, point_count, epsilon
            )

        return _observe


def reduce_tracks(
    tracks: Sequence[Track],
    config: SolverConfig,
    *,
    max_workers: int | None = None,
    compute_deviation: bool | None = None,
) -> List[Track]:
    """Convenience wrapper returning only the (possibly) reduced tracks."""

    service = ReductionService(
        config, max_workers=max_workers, compute_deviation=compute_deviation
    )
    return [result.track for result in service.process(tracks)]


__all__ = ["ReductionService", "TrackReduction", "reduce_track", "reduce_tracks"]
