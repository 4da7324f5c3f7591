"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable track builders and GPX
documents shared across test modules.
"""
from __future__ import annotations

import math
import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Sequence

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import gpxpy.gpx  # noqa: E402

from gpx_tools.models import Track, TrackPoint, TrackSegment  # noqa: E402


# --- Factory helpers -------------------------------------------------
def make_segment(coords: Sequence[Sequence[float]]) -> TrackSegment:
    start = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)
    points = [
        TrackPoint(
            longitude=float(x),
            latitude=float(y),
            elevation=10.0 + idx,
            time=start + timedelta(seconds=idx),
            name=f"p{idx}",
        )
        for idx, (x, y) in enumerate(coords)
    ]
    return TrackSegment(points=points)


def wave_coords(count: int, amplitude: float = 0.01, offset: float = 0.0) -> List[tuple]:
    return [
        (offset + idx * 0.001, amplitude * math.sin(idx / 10.0))
        for idx in range(count)
    ]


def line_coords(count: int) -> List[tuple]:
    return [(idx * 0.001, idx * 0.0005) for idx in range(count)]


def make_track(*segments: Sequence[Sequence[float]], name: str = "Morning Run") -> Track:
    return Track(
        segments=[make_segment(coords) for coords in segments],
        name=name,
        description="Loop around the park",
        metadata={"type": "running"},
    )


def counting(primitive: Callable) -> Callable:
    """Wrap a primitive so the number of calls is recorded on ``.calls``."""

    def _wrapped(coords, epsilon):
        _wrapped.calls += 1
        return primitive(coords, epsilon)

    _wrapped.calls = 0
    return _wrapped


def build_gpx_document(track_point_counts: Sequence[Sequence[int]]) -> gpxpy.gpx.GPX:
    """Build a GPX document with one track per entry of segment point counts."""

    document = gpxpy.gpx.GPX()
    start = datetime(2025, 3, 1, 7, 30, tzinfo=timezone.utc)
    for track_index, segment_counts in enumerate(track_point_counts):
        gpx_track = gpxpy.gpx.GPXTrack(
            name=f"Track {track_index + 1}", description=f"Description {track_index + 1}"
        )
        for seg_index, count in enumerate(segment_counts):
            segment = gpxpy.gpx.GPXTrackSegment()
            for idx in range(count):
                segment.points.append(
                    gpxpy.gpx.GPXTrackPoint(
                        latitude=51.48 + 0.0004 * math.sin(idx / 7.0) + seg_index * 0.01,
                        longitude=-3.18 + idx * 0.0002,
                        elevation=20.0 + idx * 0.5,
                        time=start + timedelta(seconds=5 * idx),
                    )
                )
            gpx_track.segments.append(segment)
        document.tracks.append(gpx_track)
    return document


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def wave_track() -> Track:
    return make_track(wave_coords(400), wave_coords(300, offset=1.0))


@pytest.fixture
def gpx_file(tmp_path):
    document = build_gpx_document([[120, 80], [30]])
    path = tmp_path / "ride.gpx"
    path.write_text(document.to_xml(), encoding="utf-8")
    return path
