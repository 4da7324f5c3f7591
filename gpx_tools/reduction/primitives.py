"""Single-pass polyline simplification primitives returning retained indices.

Both variants delegate to the ``simplification`` package, which wraps the
Rust ``geo`` implementations of Ramer-Douglas-Peucker and
Visvalingam-Whyatt.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Sequence

import numpy as np
from numpy.typing import NDArray
from simplification.cutil import simplify_coords_idx, simplify_coords_vw_idx

from ..models import SimplificationMethod

CoordinateArray = NDArray[np.float64]
Primitive = Callable[[CoordinateArray, float], List[int]]


def rdp_indices(points: Iterable[Sequence[float]], epsilon: float) -> List[int]:
    """Ramer-Douglas-Peucker simplification.

    Keeps a point when its distance to the chord between the enclosing kept
    points is greater than ``epsilon``. The first and last index are always
    retained.
    """

    array = as_coordinate_array(points)
    if len(array) < 3:
        return list(range(len(array)))
    return [int(index) for index in simplify_coords_idx(array, float(epsilon))]


def vw_indices(points: Iterable[Sequence[float]], epsilon: float) -> List[int]:
    """Visvalingam-Whyatt simplification.

    Drops interior points whose triangle with their current neighbours has
    an area of at most ``epsilon``, smallest first.
    """

    array = as_coordinate_array(points)
    if len(array) < 3:
        return list(range(len(array)))
    return [int(index) for index in simplify_coords_vw_idx(array, float(epsilon))]


_PRIMITIVES: dict[SimplificationMethod, Primitive] = {
    SimplificationMethod.RDP: rdp_indices,
    SimplificationMethod.VW: vw_indices,
}


def get_primitive(method: SimplificationMethod | str) -> Primitive:
    """Return the simplification function registered for ``method``."""

    return _PRIMITIVES[SimplificationMethod(method)]


def as_coordinate_array(points: Iterable[Sequence[float]]) -> CoordinateArray:
    """Convert an iterable of 2D coordinates into a finite, contiguous float64 array."""

    if isinstance(points, np.ndarray):
        array = np.asarray(points, dtype=float)
    else:
        array = np.asarray(list(points), dtype=float)
    if array.size == 0:
        return np.empty((0, 2), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError("Expected a sequence of 2D coordinates")
    if not np.all(np.isfinite(array)):
        raise ValueError("Coordinates must be finite numbers")
    return np.ascontiguousarray(array)
