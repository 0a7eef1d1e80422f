"""
K-Means runner: initialization, stepping and run-to-convergence.

The functions here form the engine's public surface. They take a
ClusteringState and return a new one:

    initialize(points, k, strategy)  -> INITIALIZED
    step(state)                      -> ITERATING | CONVERGED | MAX_ITERATIONS_REACHED
    iterate(state)                   -> generator, one state per iteration
    run_to_convergence(state)        -> last state, with per-iteration callback
    set_centroid_position(state, ..) -> reassigned state, same iteration count

KMeansRunner wraps them for callers that prefer holding a session object.
"""

import time
from dataclasses import replace
from typing import Callable, Iterator, Optional, Sequence, Union

import numpy as np

from kmeans_lab.models import get_initializer
from kmeans_lab.models.base import check_random_state
from kmeans_lab.models.state import ClusteringState, InitStrategy, Point, Status
from kmeans_lab.models.steps import (
    DEFAULT_TOLERANCE, assign, compute_wcss, converged, empty_clusters, update,
    warn_empty_clusters
)

DEFAULT_MAX_ITERATIONS = 20

RandomState = Union[None, int, np.random.RandomState]


def initialize(
    points: Sequence[Point],
    k: int,
    strategy: Union[InitStrategy, str] = InitStrategy.RANDOM,
    random_state: RandomState = None,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS
) -> ClusteringState:
    """
    Start a fresh clustering session.

    Args:
        points: Points to cluster; existing labels are cleared
        k: Number of clusters
        strategy: Initialization strategy or tag
        random_state: Seed or RandomState for the random strategies
        tolerance: Centroid movement below which the run has converged
        max_iterations: Iteration cap for the session

    Returns:
        ClusteringState in status INITIALIZED

    Raises:
        InsufficientDataError: if there are fewer points than k
    """
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")

    strategy = InitStrategy.parse(strategy)
    centroids = get_initializer(strategy).initialize(points, k, random_state)

    return ClusteringState(
        points=tuple(p.with_cluster(None) for p in points),
        centroids=centroids,
        iteration_count=0,
        wcss_history=(),
        status=Status.INITIALIZED,
        strategy=strategy,
        tolerance=tolerance,
        max_iterations=max_iterations
    )


def step(state: ClusteringState) -> ClusteringState:
    """
    Run one assign -> update -> convergence check cycle.

    The recorded WCSS is that of the new labels against the updated
    centroids. Convergence wins over the iteration cap when both apply.
    """
    if state.status is Status.UNINITIALIZED:
        raise ValueError("Cannot step an uninitialized clustering state; call initialize() first")

    points = assign(state.points, state.centroids)
    centroids = update(points, state.centroids)
    empty = tuple(empty_clusters(points, state.k))
    warn_empty_clusters(empty)

    iteration_count = state.iteration_count + 1
    if converged(state.centroids, centroids, state.tolerance):
        status = Status.CONVERGED
    elif iteration_count >= state.max_iterations:
        status = Status.MAX_ITERATIONS_REACHED
    else:
        status = Status.ITERATING

    return replace(
        state,
        points=points,
        centroids=centroids,
        iteration_count=iteration_count,
        wcss_history=state.wcss_history + (compute_wcss(points, centroids),),
        status=status,
        empty_clusters=empty
    )


def iterate(
    state: ClusteringState,
    max_iterations: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None
) -> Iterator[ClusteringState]:
    """
    Yield one state per completed iteration until a terminal status.

    ``should_stop`` is polled before every iteration; when it returns True
    the generator ends and the last yielded state keeps its ITERATING status.
    Consumers decide the pace: drain it at once in tests, or pull one state
    per frame in an interactive view.
    """
    if max_iterations is not None:
        state = replace(state, max_iterations=max_iterations)

    while not state.status.is_terminal:
        if should_stop is not None and should_stop():
            return
        state = step(state)
        yield state


def run_to_convergence(
    state: ClusteringState,
    max_iterations: Optional[int] = None,
    on_iteration: Optional[Callable[[ClusteringState], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    interval: float = 0.0
) -> ClusteringState:
    """
    Iterate until CONVERGED, MAX_ITERATIONS_REACHED or a stop request.

    Args:
        state: Starting state
        max_iterations: Overrides the state's iteration cap
        on_iteration: Optional callback(state) after each iteration, e.g. to redraw
        should_stop: Optional cooperative cancellation flag
        interval: Seconds to wait between iterations (animation pacing)

    Returns:
        The last completed state
    """
    for state in iterate(state, max_iterations, should_stop):
        if on_iteration:
            on_iteration(state)
        if interval > 0 and not state.status.is_terminal:
            time.sleep(interval)
    return state


def set_centroid_position(state: ClusteringState, centroid_id: str, x: float, y: float) -> ClusteringState:
    """
    Move one centroid by hand and reassign points to it immediately.

    Only the assignment step runs: other centroids stay put and neither the
    iteration count nor the WCSS history changes. A finished session is
    reopened so it can be run again from the new layout.
    """
    if state.status is Status.UNINITIALIZED:
        raise ValueError("Cannot move a centroid before initialization")

    target = state.get_centroid(centroid_id)
    centroids = tuple(
        replace(c, x=float(x), y=float(y)) if c.id == target.id else c
        for c in state.centroids
    )
    status = state.status
    if status.is_terminal:
        status = Status.ITERATING if state.iteration_count > 0 else Status.INITIALIZED
    return replace(state, centroids=centroids, points=assign(state.points, centroids), status=status)


class KMeansRunner:
    """
    Stateful wrapper around the functional engine.

    Holds the current ClusteringState and the last initialization settings
    so a session can be stepped, run, stopped and reset.
    """

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS,
                 random_state: RandomState = None):
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.rng = check_random_state(random_state)
        self.state = ClusteringState.empty()
        self._stop_requested = False
        self._source_points = ()
        self._k = None
        self._strategy = InitStrategy.RANDOM

    def initialize(self, points: Sequence[Point], k: int,
                   strategy: Union[InitStrategy, str] = InitStrategy.RANDOM) -> ClusteringState:
        self.state = initialize(points, k, strategy, self.rng, self.tolerance, self.max_iterations)
        self._source_points = tuple(points)
        self._k = k
        self._strategy = self.state.strategy
        self._stop_requested = False
        return self.state

    def reset(self) -> ClusteringState:
        """Re-initialize with the same points, k and strategy."""
        if self._k is None:
            raise ValueError("Nothing to reset; call initialize() first")
        return self.initialize(self._source_points, self._k, self._strategy)

    def step(self) -> ClusteringState:
        self.state = step(self.state)
        return self.state

    def iterate(self) -> Iterator[ClusteringState]:
        self._stop_requested = False
        for state in iterate(self.state, should_stop=lambda: self._stop_requested):
            self.state = state
            yield state

    def run(self, on_iteration: Optional[Callable[[ClusteringState], None]] = None,
            interval: float = 0.0) -> ClusteringState:
        self._stop_requested = False
        self.state = run_to_convergence(
            self.state,
            on_iteration=on_iteration,
            should_stop=lambda: self._stop_requested,
            interval=interval
        )
        return self.state

    def stop(self) -> None:
        """Ask a running loop to finish after the current iteration."""
        self._stop_requested = True

    def set_centroid_position(self, centroid_id: str, x: float, y: float) -> ClusteringState:
        self.state = set_centroid_position(self.state, centroid_id, x, y)
        return self.state

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def termination_reason(self) -> Optional[Status]:
        """CONVERGED or MAX_ITERATIONS_REACHED once the run has ended, else None."""
        return self.state.status if self.state.status.is_terminal else None
