"""Dataclasses describing tracks and solver parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import math
from typing import Any, Dict, List, Optional

from .config import DEFAULT_MAX_ITERATIONS, DEFAULT_RDP_EPSILON, DEFAULT_VW_EPSILON
from .errors import ConfigurationError


@dataclass
class TrackPoint:
    """A single recorded position.

    ``raw`` holds the object the point was parsed from (e.g. a gpxpy track
    point) so attributes this model does not name survive a reduction.
    """

    longitude: float
    latitude: float
    elevation: Optional[float] = None
    time: Optional[datetime] = None
    name: Optional[str] = None
    raw: Any = None


@dataclass
class TrackSegment:
    points: List[TrackPoint] = field(default_factory=list)
    raw: Any = None

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class Track:
    segments: List[TrackSegment] = field(default_factory=list)
    name: Optional[str] = None
    description: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw: Any = None

    @property
    def point_count(self) -> int:
        """Total number of points across all segments."""
        return sum(len(segment.points) for segment in self.segments)


class SimplificationMethod(str, Enum):
    """Polyline simplification primitive driven by the epsilon search."""

    RDP = "rdp"  # Ramer-Douglas-Peucker, maximum perpendicular distance
    VW = "vw"  # Visvalingam-Whyatt, minimum effective area

    @property
    def default_epsilon(self) -> float:
        if self is SimplificationMethod.VW:
            return DEFAULT_VW_EPSILON
        return DEFAULT_RDP_EPSILON


@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Immutable parameters for one epsilon search invocation."""

    max_points: int
    max_iterations: int
    method: SimplificationMethod
    initial_epsilon: float

    def __post_init__(self) -> None:
        if not isinstance(self.method, SimplificationMethod):
            try:
                object.__setattr__(self, "method", SimplificationMethod(self.method))
            except ValueError as exc:
                raise ConfigurationError(
                    f"Unknown simplification method: {self.method!r}"
                ) from exc
        if self.max_points < 0:
            raise ConfigurationError("max_points must not be negative")
        if self.max_iterations < 1:
            raise ConfigurationError("max_iterations must be at least 1")
        if not math.isfinite(self.initial_epsilon) or self.initial_epsilon <= 0:
            raise ConfigurationError("initial_epsilon must be a positive number")

    @classmethod
    def from_method(
        cls,
        max_points: int,
        method: SimplificationMethod | str = SimplificationMethod.RDP,
        *,
        max_iterations: Optional[int] = None,
        initial_epsilon: Optional[float] = None,
    ) -> "SolverConfig":
        """Build a config, filling unset values from the configured defaults."""

        try:
            resolved = SimplificationMethod(method)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown simplification method: {method!r}") from exc
        return cls(
            max_points=max_points,
            max_iterations=(
                DEFAULT_MAX_ITERATIONS if max_iterations is None else max_iterations
            ),
            method=resolved,
            initial_epsilon=(
                resolved.default_epsilon if initial_epsilon is None else initial_epsilon
            ),
        )
