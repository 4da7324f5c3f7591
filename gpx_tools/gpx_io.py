"""Read and write GPX documents, normalising tracks into package models."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple, Union

import gpxpy
import gpxpy.gpx

from .errors import GpxFormatError
from .models import Track, TrackPoint, TrackSegment

PathLike = Union[str, Path]

_TRACK_METADATA_FIELDS = ("comment", "source", "type", "number", "link")


def parse_gpx(xml: str) -> Tuple[gpxpy.gpx.GPX, List[Track]]:
    """Parse GPX text into the gpxpy document and normalised tracks."""

    try:
        document = gpxpy.parse(xml)
    except gpxpy.gpx.GPXException as exc:
        raise GpxFormatError(f"Unable to parse GPX: {exc}") from exc
    return document, [_track_from_gpx(track) for track in document.tracks]


def read_gpx(path: PathLike) -> Tuple[gpxpy.gpx.GPX, List[Track]]:
    """Load a GPX file from disk."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise GpxFormatError(f"Unable to decode GPX file {path}: {exc}") from exc
    return parse_gpx(text)


def update_gpx_tracks(document: gpxpy.gpx.GPX, tracks: Sequence[Track]) -> None:
    """Replace the segments of each document track with those of ``tracks``.

    Only segment contents change. Names, descriptions and extensions of the
    document tracks stay as parsed, and so do the extensions of every parsed
    segment. Segments whose points are unchanged are kept as they are.
    """

    if len(tracks) != len(document.tracks):
        raise ValueError(
            f"Document has {len(document.tracks)} tracks, got {len(tracks)}"
        )
    for gpx_track, track in zip(document.tracks, tracks):
        gpx_track.segments = [_segment_to_gpx(segment) for segment in track.segments]


def write_gpx(document: gpxpy.gpx.GPX, path: PathLike) -> Path:
    """Serialise ``document`` to ``path`` and return the written path."""

    output = Path(path)
    output.write_text(document.to_xml(), encoding="utf-8")
    return output


def _track_from_gpx(gpx_track: gpxpy.gpx.GPXTrack) -> Track:
    metadata = {
        key: getattr(gpx_track, key)
        for key in _TRACK_METADATA_FIELDS
        if getattr(gpx_track, key, None) is not None
    }
    return Track(
        segments=[
            TrackSegment(
                points=[_point_from_gpx(point) for point in segment.points],
                raw=segment,
            )
            for segment in gpx_track.segments
        ],
        name=gpx_track.name,
        description=gpx_track.description,
        metadata=metadata,
        raw=gpx_track,
    )


def _segment_to_gpx(segment: TrackSegment) -> gpxpy.gpx.GPXTrackSegment:
    """Return the originating gpxpy segment holding ``segment``'s points."""

    points = [_point_to_gpx(point) for point in segment.points]
    if not isinstance(segment.raw, gpxpy.gpx.GPXTrackSegment):
        return gpxpy.gpx.GPXTrackSegment(points=points)
    raw_points = segment.raw.points
    unchanged = len(points) == len(raw_points) and all(
        new is old for new, old in zip(points, raw_points)
    )
    if not unchanged:
        segment.raw.points = points
    return segment.raw


def _point_from_gpx(point: gpxpy.gpx.GPXTrackPoint) -> TrackPoint:
    return TrackPoint(
        longitude=float(point.longitude),
        latitude=float(point.latitude),
        elevation=point.elevation,
        time=point.time,
        name=point.name,
        raw=point,
    )


def _point_to_gpx(point: TrackPoint) -> gpxpy.gpx.GPXTrackPoint:
    """Return the originating gpxpy point, or build one for synthetic points."""

    if isinstance(point.raw, gpxpy.gpx.GPXTrackPoint):
        return point.raw
    return gpxpy.gpx.GPXTrackPoint(
        latitude=point.latitude,
        longitude=point.longitude,
        elevation=point.elevation,
        time=point.time,
        name=point.name,
    )
