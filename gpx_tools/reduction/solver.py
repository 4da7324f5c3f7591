"""Bounded epsilon search driving a simplification primitive towards a point budget.

The search runs in two phases that share one evaluation counter:

1. Bracket expansion: starting from ``[0, 2 * initial_epsilon]`` the upper
   bound is doubled until a trial fits the budget or the counter runs out.
   Every expansion trial replaces the current best.
2. Bisection: the bracket is halved while there is room below the budget.
   A trial only replaces the best when it either moves an over-budget best
   back towards the budget, or adds points without crossing it.

Point count is not guaranteed to be monotonic in epsilon (area based
elimination in particular), so bisection may stop improving before the
budget is met. The counter still bounds the work and the best trial seen is
always returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..models import SolverConfig
from .primitives import CoordinateArray, Primitive, get_primitive

SegmentIndices = List[List[int]]
SearchObserver = Callable[[int, float, int], None]


@dataclass(slots=True)
class TrialResult:
    """Retained indices for every segment at one epsilon."""

    epsilon: float
    indices: SegmentIndices
    point_count: int


@dataclass(slots=True)
class SearchResult:
    """Best trial found by :func:`search_epsilon`."""

    indices: SegmentIndices
    point_count: int
    epsilon: float
    iterations: int
    budget_met: bool


def evaluate_trial(
    segments: Sequence[CoordinateArray],
    epsilon: float,
    primitive: Primitive,
) -> TrialResult:
    """Simplify every segment at ``epsilon`` and total the retained points."""

    indices = [list(primitive(coords, epsilon)) for coords in segments]
    return TrialResult(
        epsilon=epsilon,
        indices=indices,
        point_count=sum(len(kept) for kept in indices),
    )


def is_better_candidate(best_count: int, new_count: int, max_points: int) -> bool:
    """Return True when a bisection trial should replace the current best."""

    if best_count > max_points and new_count < best_count:
        return True
    return best_count < new_count <= max_points


def search_epsilon(
    segments: Sequence[CoordinateArray],
    config: SolverConfig,
    *,
    primitive: Optional[Primitive] = None,
    observer: Optional[SearchObserver] = None,
) -> SearchResult:
    """Find the epsilon whose total retained count best approaches ``max_points``.

    Args:
        segments: Coordinate arrays of every segment in the track. All of them
            are simplified at the same epsilon in each trial.
        config: Budget, iteration cap, method and initial epsilon.
        primitive: Optional override for the simplification function selected
            by ``config.method``.
        observer: Optional callback receiving ``(iteration, epsilon, count)``
            after every trial.

    Returns:
        The best :class:`SearchResult` found within ``config.max_iterations``
        trials.

    Raises:
        Exception: Anything raised by the primitive propagates unchanged.
    """

    simplify = primitive or get_primitive(config.method)
    max_points = config.max_points
    iterations = 0

    def _trial(epsilon: float) -> TrialResult:
        nonlocal iterations
        iterations += 1
        trial = evaluate_trial(segments, epsilon, simplify)
        if observer is not None:
            observer(iterations, epsilon, trial.point_count)
        return trial

    # initial_epsilon is the midpoint of [min_epsilon, max_epsilon].
    min_epsilon = 0.0
    max_epsilon = config.initial_epsilon * 2.0 - min_epsilon

    best = _trial(max_epsilon)
    while best.point_count > max_points and iterations < config.max_iterations:
        max_epsilon *= 2.0
        best = _trial(max_epsilon)

    while iterations < config.max_iterations and best.point_count < max_points:
        epsilon = (min_epsilon + max_epsilon) / 2.0
        trial = _trial(epsilon)
        if is_better_candidate(best.point_count, trial.point_count, max_points):
            best = trial
        if trial.point_count < max_points:
            max_epsilon = epsilon
        else:
            min_epsilon = epsilon

    return SearchResult(
        indices=best.indices,
        point_count=best.point_count,
        epsilon=best.epsilon,
        iterations=iterations,
        budget_met=best.point_count <= max_points,
    )
