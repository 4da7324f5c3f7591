"""Deviation diagnostics comparing original and reduced geometry."""

from __future__ import annotations

from typing import Optional, Sequence

from shapely.geometry import LineString

from ..models import Track, TrackSegment
from .adapter import to_coordinates


def segment_deviation(original: TrackSegment, reduced: TrackSegment) -> Optional[float]:
    """Return the Hausdorff distance between two segments.

    Distances are in coordinate units. Returns ``None`` when either side has
    fewer than two points and so cannot form a line.
    """

    if len(original.points) < 2 or len(reduced.points) < 2:
        return None
    original_line = LineString(to_coordinates(original))
    reduced_line = LineString(to_coordinates(reduced))
    return float(original_line.hausdorff_distance(reduced_line))


def max_track_deviation(original: Track, reduced: Track) -> Optional[float]:
    """Return the largest segment deviation between two versions of a track."""

    deviations: Sequence[Optional[float]] = [
        segment_deviation(before, after)
        for before, after in zip(original.segments, reduced.segments)
    ]
    measured = [value for value in deviations if value is not None]
    if not measured:
        return None
    return max(measured)
