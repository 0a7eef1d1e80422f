"""
Lloyd iteration building blocks.

Each function is pure: it takes points and centroids and returns new
sequences without touching its inputs.

    assign   - each point -> nearest centroid
    update   - each centroid -> mean of its points
    converged - did any centroid move by more than the tolerance?
"""

import math
import warnings
from typing import List, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from kmeans_lab.exceptions import EmptyClusterWarning, InvalidCentroidReference
from kmeans_lab.models.state import Centroid, Point

DEFAULT_TOLERANCE = 0.1


def distance(a, b) -> float:
    """Euclidean distance between two objects exposing ``x`` and ``y``."""
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2)


def coordinates(items: Sequence) -> np.ndarray:
    """Stack ``x``/``y`` attributes into an (n, 2) float array."""
    if len(items) == 0:
        return np.empty((0, 2))
    return np.array([[item.x, item.y] for item in items], dtype=float)


def distance_matrix(points: Sequence[Point], centroids: Sequence[Centroid]) -> np.ndarray:
    """Distances from every point (rows) to every centroid (columns)."""
    return cdist(coordinates(points), coordinates(centroids), metric='euclidean')


def assign(points: Sequence[Point], centroids: Sequence[Centroid]) -> Tuple[Point, ...]:
    """
    Label every point with the index of its nearest centroid.

    Ties go to the lower centroid index.
    """
    if len(points) == 0:
        return ()
    if len(centroids) == 0:
        raise ValueError("Cannot assign points without centroids")

    nearest = np.argmin(distance_matrix(points, centroids), axis=1)
    return tuple(
        point.with_cluster(centroids[idx].cluster_index)
        for point, idx in zip(points, nearest)
    )


def _check_labels(points: Sequence[Point], k: int) -> None:
    for point in points:
        if point.cluster is not None and not 0 <= point.cluster < k:
            raise InvalidCentroidReference(
                f"Point {point.id} references cluster {point.cluster}, expected 0..{k - 1}"
            )


def empty_clusters(points: Sequence[Point], k: int) -> List[int]:
    """Cluster indices that no point is labelled with."""
    used = {p.cluster for p in points}
    return [i for i in range(k) if i not in used]


def update(points: Sequence[Point], centroids: Sequence[Centroid]) -> Tuple[Centroid, ...]:
    """
    Move every centroid to the mean of the points labelled with it.

    A centroid whose cluster is empty is returned unchanged, previous
    position included. It is not re-seeded.
    """
    k = len(centroids)
    _check_labels(points, k)

    coords = coordinates(points)
    labels = np.array([-1 if p.cluster is None else p.cluster for p in points], dtype=int)

    new_centroids = []
    for centroid in centroids:
        mask = labels == centroid.cluster_index
        if not np.any(mask):
            new_centroids.append(centroid)
            continue
        mean_x, mean_y = coords[mask].mean(axis=0)
        new_centroids.append(centroid.moved_to(float(mean_x), float(mean_y)))

    return tuple(new_centroids)


def warn_empty_clusters(indices: Sequence[int]) -> None:
    if indices:
        warnings.warn(
            f"Clusters {list(indices)} received no points; their centroids were left unchanged",
            EmptyClusterWarning,
            stacklevel=3,
        )


def converged(old_centroids: Sequence[Centroid], new_centroids: Sequence[Centroid],
              tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True when every centroid moved strictly less than ``tolerance``, compared by index."""
    if len(old_centroids) != len(new_centroids):
        raise ValueError(
            f"Centroid counts differ: {len(old_centroids)} vs {len(new_centroids)}"
        )
    return all(distance(old, new) < tolerance for old, new in zip(old_centroids, new_centroids))


def compute_wcss(points: Sequence[Point], centroids: Sequence[Centroid]) -> float:
    """
    Within-Cluster Sum of Squares.

    Sum over points of the squared distance to the centroid matching the
    point's label. Unlabelled points, or labels with no matching centroid,
    contribute nothing.
    """
    by_index = {c.cluster_index: c for c in centroids}
    total = 0.0
    for point in points:
        centroid = by_index.get(point.cluster) if point.cluster is not None else None
        if centroid is not None:
            total += (point.x - centroid.x) ** 2 + (point.y - centroid.y) ** 2
    return total
