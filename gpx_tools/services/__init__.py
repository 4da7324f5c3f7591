"""Service layer package.

Exports high-level services consumed by orchestration / presentation layers.
"""

from .reduction_service import (
    ReductionService,
    TrackReduction,
    reduce_track,
    reduce_tracks,
)

__all__ = ["ReductionService", "TrackReduction", "reduce_track", "reduce_tracks"]
