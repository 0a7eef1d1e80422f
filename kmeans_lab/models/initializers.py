"""
Centroid initialization strategies.

Random      - K distinct points picked from a shuffle of the data
K-Means++   - D² sampling, spreads the seeds apart
Grid        - centers of a grid laid over the bounding box; reproducible
              starting layout for dragging centroids by hand
"""

import math

import numpy as np

from kmeans_lab.models.base import BaseInitializer
from kmeans_lab.models.state import InitStrategy


class RandomInitializer(BaseInitializer):
    """Seed centroids with the first K points of a uniform random permutation."""

    name = "Random"
    description = "Pick K data points at random as starting centroids"
    strategy = InitStrategy.RANDOM

    def initial_positions(self, X: np.ndarray, k: int, rng: np.random.RandomState) -> np.ndarray:
        indices = rng.permutation(X.shape[0])[:k]
        return X[indices].copy()


class KMeansPlusPlusInitializer(BaseInitializer):
    """
    K-Means++ seeding.

    1. First centroid: a point chosen uniformly at random
    2. Each next centroid: a point sampled with probability ∝ D(x)²,
       D(x) being the distance to the nearest centroid chosen so far

    Points sitting on an existing centroid have zero weight, so distinct
    points are preferred whenever any remain.
    """

    name = "K-Means++"
    description = "Probabilistic seeding that favours points far from chosen centroids"
    strategy = InitStrategy.KMEANS_PLUS_PLUS

    def initial_positions(self, X: np.ndarray, k: int, rng: np.random.RandomState) -> np.ndarray:
        n_samples = X.shape[0]
        centroids = np.zeros((k, 2))
        centroids[0] = X[rng.randint(n_samples)]

        for i in range(1, k):
            diffs = X[:, None, :] - centroids[None, :i, :]
            d2 = np.min(np.sum(diffs ** 2, axis=2), axis=1)
            total = d2.sum()

            if total > 0:
                idx = rng.choice(n_samples, p=d2 / total)
            else:
                # Every point coincides with a chosen centroid
                idx = rng.randint(n_samples)
            centroids[i] = X[idx]

        return centroids


class GridInitializer(BaseInitializer):
    """
    Place centroids at the cell centers of a grid over the data bounds.

    The grid has ceil(sqrt(K)) columns and ceil(K / columns) rows; centroid
    i goes to cell i in row-major order regardless of point density.
    """

    name = "Grid (Manual)"
    description = "Evenly spaced starting centroids, meant to be dragged by hand"
    strategy = InitStrategy.GRID
    uses_randomness = False

    def initial_positions(self, X: np.ndarray, k: int, rng: np.random.RandomState) -> np.ndarray:
        x_min, y_min = X.min(axis=0)
        x_max, y_max = X.max(axis=0)

        cols = math.ceil(math.sqrt(k))
        rows = math.ceil(k / cols)

        positions = np.zeros((k, 2))
        for i in range(k):
            col = i % cols
            row = i // cols
            positions[i, 0] = x_min + (x_max - x_min) * (col + 0.5) / cols
            positions[i, 1] = y_min + (y_max - y_min) * (row + 0.5) / rows

        return positions
