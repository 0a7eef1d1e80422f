"""
Elbow method: WCSS as a function of the number of clusters.

For every K in 1..max_k a brand new session is initialized and run to
convergence; nothing is shared between trials. Picking the elbow is left
to whoever reads the curve.
"""

import warnings
from typing import Callable, List, Optional, Sequence, Union

import pandas as pd

from kmeans_lab.exceptions import EmptyClusterWarning, InsufficientDataError, NonConvergenceWarning
from kmeans_lab.models.runner import initialize, run_to_convergence
from kmeans_lab.models.state import ElbowResult, InitStrategy, Point, Status
from kmeans_lab.models.steps import compute_wcss

ELBOW_MAX_ITERATIONS = 50
ELBOW_TOLERANCE = 0.01
DEFAULT_MAX_K = 8


class ElbowAnalyzer:
    """
    Run K-Means for a range of K and collect the final WCSS of each run.

    With a random_state, trial K is seeded with random_state + K so each
    trial is reproducible on its own.
    """

    def __init__(
        self,
        strategy: Union[InitStrategy, str] = InitStrategy.RANDOM,
        max_iterations: int = ELBOW_MAX_ITERATIONS,
        tolerance: float = ELBOW_TOLERANCE,
        random_state: Optional[int] = None
    ):
        self.strategy = InitStrategy.parse(strategy)
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.random_state = random_state
        self.results: List[ElbowResult] = []
        self.statuses: List[Status] = []

    def _trial_seed(self, k: int) -> Optional[int]:
        if self.random_state is None:
            return None
        return self.random_state + k

    def run_trial(self, points: Sequence[Point], k: int) -> ElbowResult:
        """Cluster the points with k centroids and return the final WCSS."""
        state = initialize(
            points, k, self.strategy,
            random_state=self._trial_seed(k),
            tolerance=self.tolerance,
            max_iterations=self.max_iterations
        )
        with warnings.catch_warnings():
            # Frozen empty clusters are expected for large K
            warnings.simplefilter('ignore', category=EmptyClusterWarning)
            state = run_to_convergence(state)

        if state.status is Status.MAX_ITERATIONS_REACHED:
            warnings.warn(
                f"Elbow trial k={k} stopped after {state.iteration_count} iterations without converging",
                NonConvergenceWarning
            )
        self.statuses.append(state.status)
        return ElbowResult(k=k, wcss=compute_wcss(state.points, state.centroids))

    def analyze(
        self,
        points: Sequence[Point],
        max_k: int = DEFAULT_MAX_K,
        progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> List[ElbowResult]:
        """
        Compute one ElbowResult per K = 1..max_k.

        Args:
            points: Points to cluster
            max_k: Largest K to try; K values with fewer points than K are
                skipped with a warning
            progress_callback: Optional callback(current, total) for progress

        Returns:
            List of ElbowResult ordered by increasing K
        """
        if max_k < 1:
            raise ValueError(f"max_k must be at least 1, got {max_k}")

        self.clear_results()
        for k in range(1, max_k + 1):
            try:
                self.results.append(self.run_trial(points, k))
            except InsufficientDataError as e:
                warnings.warn(f"Failed for k={k}: {e}")

            if progress_callback:
                progress_callback(k, max_k)

        return list(self.results)

    def get_results_dataframe(self) -> pd.DataFrame:
        """Get results as a DataFrame with the WCSS drop from the previous K."""
        if not self.results:
            return pd.DataFrame(columns=['k', 'wcss', 'wcss_drop', 'status'])

        df = pd.DataFrame([r.to_dict() for r in self.results])
        df['wcss_drop'] = -df['wcss'].diff()
        df['status'] = [s.value for s in self.statuses]
        return df

    def clear_results(self):
        """Clear all stored results."""
        self.results = []
        self.statuses = []


def run_elbow_analysis(
    points: Sequence[Point],
    max_k: int = DEFAULT_MAX_K,
    strategy: Union[InitStrategy, str] = InitStrategy.RANDOM,
    random_state: Optional[int] = None,
    max_iterations: int = ELBOW_MAX_ITERATIONS,
    tolerance: float = ELBOW_TOLERANCE
) -> List[ElbowResult]:
    """Convenience wrapper around ElbowAnalyzer.analyze."""
    analyzer = ElbowAnalyzer(strategy, max_iterations, tolerance, random_state)
    return analyzer.analyze(points, max_k)
