"""Errors and warnings raised by the clustering engine."""


class InsufficientDataError(ValueError):
    """Raised when fewer points are available than clusters requested."""

    def __init__(self, n_points: int, k: int):
        self.n_points = n_points
        self.k = k
        super().__init__(
            f"Cannot initialize {k} centroids from {n_points} points. "
            f"Need at least {k} points."
        )


class InvalidCentroidReference(AssertionError):
    """A point carries a cluster label outside [0, K)."""


class EmptyClusterWarning(UserWarning):
    """A centroid received no points during an update and was left in place."""


class NonConvergenceWarning(UserWarning):
    """An iteration cap was reached before centroids settled."""
