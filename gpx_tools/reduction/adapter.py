"""Conversion between track segments and primitive coordinate arrays."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..models import TrackSegment
from .primitives import CoordinateArray


def to_coordinates(segment: TrackSegment) -> CoordinateArray:
    """Project a segment onto an ``(n, 2)`` array of ``(longitude, latitude)``."""

    if not segment.points:
        return np.empty((0, 2), dtype=float)
    return np.array(
        [(point.longitude, point.latitude) for point in segment.points],
        dtype=float,
    )


def from_indices(original: TrackSegment, indices: Sequence[int]) -> TrackSegment:
    """Return a new segment holding ``original.points[i]`` for each index.

    The point objects and the segment's ``raw`` source are reused, so every
    attribute they carry travels unchanged into the reduced segment.
    """

    points = original.points
    return TrackSegment(
        points=[points[int(index)] for index in indices],
        raw=original.raw,
    )
