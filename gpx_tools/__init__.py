"""GPX track utilities: adaptive point-budget reduction and file summaries."""

from .errors import ConfigurationError, GpxFormatError
from .main import main
from .models import SimplificationMethod, SolverConfig, Track, TrackPoint, TrackSegment
from .services import ReductionService, TrackReduction, reduce_track, reduce_tracks

__all__ = [
    "main",
    "ConfigurationError",
    "GpxFormatError",
    "SimplificationMethod",
    "SolverConfig",
    "Track",
    "TrackPoint",
    "TrackSegment",
    "ReductionService",
    "TrackReduction",
    "reduce_track",
    "reduce_tracks",
]
