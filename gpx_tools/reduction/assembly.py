"""Rebuild reduced tracks from the winning per-segment index lists."""

from __future__ import annotations

import copy
from typing import Sequence

from ..models import Track
from .adapter import from_indices


def assemble_track(original: Track, indices: Sequence[Sequence[int]]) -> Track:
    """Return a copy of ``original`` whose segments keep only ``indices``.

    Track level fields (name, description, metadata, raw source) are carried
    over unchanged.
    """

    if len(indices) != len(original.segments):
        raise ValueError(
            f"Expected {len(original.segments)} index lists, got {len(indices)}"
        )
    rebuilt = copy.copy(original)
    rebuilt.segments = [
        from_indices(segment, kept)
        for segment, kept in zip(original.segments, indices)
    ]
    return rebuilt
