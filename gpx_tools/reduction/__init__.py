"""Adaptive point-budget reduction for tracks.

Exposes the simplification primitives, the polyline adapter, the epsilon
search engine and result assembly.
"""

from .adapter import from_indices, to_coordinates
from .assembly import assemble_track
from .primitives import get_primitive, rdp_indices, vw_indices
from .solver import (
    SearchObserver,
    SearchResult,
    TrialResult,
    evaluate_trial,
    is_better_candidate,
    search_epsilon,
)
from .validation import max_track_deviation, segment_deviation

__all__ = [
    "from_indices",
    "to_coordinates",
    "assemble_track",
    "get_primitive",
    "rdp_indices",
    "vw_indices",
    "SearchObserver",
    "SearchResult",
    "TrialResult",
    "evaluate_trial",
    "is_better_candidate",
    "search_epsilon",
    "max_track_deviation",
    "segment_deviation",
]
