"""Summaries of the tracks, routes and waypoints in a GPX document."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import gpxpy.gpx
from pyproj import Geod

from .models import Track, TrackSegment

_GEOD = Geod(ellps="WGS84")


@dataclass(slots=True)
class TrackSummary:
    name: Optional[str]
    description: Optional[str]
    segment_count: int
    point_count: int
    distance_m: float


def polyline_length_m(coordinates: Sequence[Tuple[float, float]]) -> float:
    """Return the geodesic length in metres of a ``(lon, lat)`` polyline."""

    if len(coordinates) < 2:
        return 0.0
    lons = [lon for lon, _ in coordinates]
    lats = [lat for _, lat in coordinates]
    return float(_GEOD.line_length(lons, lats))


def segment_length_m(segment: TrackSegment) -> float:
    return polyline_length_m(
        [(point.longitude, point.latitude) for point in segment.points]
    )


def summarize_track(track: Track) -> TrackSummary:
    return TrackSummary(
        name=track.name,
        description=track.description,
        segment_count=len(track.segments),
        point_count=track.point_count,
        distance_m=sum(segment_length_m(segment) for segment in track.segments),
    )


def format_document_info(
    document: gpxpy.gpx.GPX,
    tracks: Sequence[Track],
    *,
    verbose: bool = False,
) -> List[str]:
    """Render waypoint, track and route summaries as printable lines."""

    lines: List[str] = []
    if document.waypoints:
        lines.append(f"Waypoints: {len(document.waypoints)}")
        for waypoint in document.waypoints:
            lines.append(f"- '{waypoint.name}'" if waypoint.name else "-  no name")
            if verbose and waypoint.description:
                lines.append("   Description:")
                lines.extend(_indented(waypoint.description, "     "))
        lines.append("")

    if tracks:
        lines.append(f"Tracks: {len(tracks)}")
        for track in tracks:
            summary = summarize_track(track)
            lines.append(f"  Track: '{summary.name}'" if summary.name else "  Track:")
            if verbose and summary.description:
                lines.append("  Description:")
                lines.extend(_indented(summary.description, "    "))
            lines.append(f"    Segments: {summary.segment_count}")
            lines.append(f"    Points: {summary.point_count}")
            lines.append(f"    Distance: {summary.distance_m / 1000.0:.2f} km")
            lines.append("")

    if document.routes:
        lines.append(f"Routes: {len(document.routes)}")
        for route in document.routes:
            lines.append(f"  Route: '{route.name}'" if route.name else "  Route:")
            if verbose and route.description:
                lines.append("  Description:")
                lines.extend(_indented(route.description, "    "))
            length = polyline_length_m(
                [(point.longitude, point.latitude) for point in route.points]
            )
            lines.append(f"    Points: {len(route.points)}")
            lines.append(f"    Distance: {length / 1000.0:.2f} km")
            lines.append("")
    return lines


def format_file_info(
    path: Path,
    document: gpxpy.gpx.GPX,
    tracks: Sequence[Track],
    *,
    verbose: bool = False,
) -> List[str]:
    lines = [f"File: {path.name}"]
    if verbose:
        lines.append(f"Size: {path.stat().st_size / 1000.0:.1f} KB")
    lines.append("")
    lines.extend(format_document_info(document, tracks, verbose=verbose))
    return lines


def _indented(text: str, prefix: str) -> List[str]:
    return [f"{prefix}{line}" for line in text.splitlines()]
