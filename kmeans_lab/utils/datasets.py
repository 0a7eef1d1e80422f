"""Synthetic datasets for the K-Means lesson."""

from typing import Tuple

import numpy as np

from kmeans_lab.models.state import Point

BOUNDS = (5.0, 95.0)


def generate_random_dataset(random_state=None) -> Tuple[Tuple[Point, ...], np.ndarray]:
    """
    Scattered 2D clusters on a 0-100 canvas.

    Between 2 and 4 clusters share one size of 8-22 points. Each cluster is
    circular or a rotated ellipse with a spread of 5-20 per axis. Every point
    gets up to ±1.5 of jitter and is clamped to [5, 95].

    The returned labels are the generating clusters, so the number of unique
    labels is the "right" K for the elbow exercise. The engine never sees them.

    Returns:
        tuple: (points, true_labels)
    """
    rng = np.random.RandomState(random_state)

    n_clusters = rng.randint(2, 5)
    points_per_cluster = rng.randint(8, 23)

    points = []
    labels = []
    for cluster in range(n_clusters):
        center_x, center_y = rng.uniform(20, 80, size=2)
        spread_x, spread_y = rng.uniform(5, 20, size=2)
        elliptical = rng.rand() > 0.5
        rotation = rng.uniform(0, 2 * np.pi)

        for i in range(points_per_cluster):
            angle = rng.uniform(0, 2 * np.pi)
            if elliptical:
                radius = rng.rand() * max(spread_x, spread_y)
                local_x = radius * np.cos(angle)
                local_y = radius * np.sin(angle) * (spread_y / spread_x)
                x = center_x + local_x * np.cos(rotation) - local_y * np.sin(rotation)
                y = center_y + local_x * np.sin(rotation) + local_y * np.cos(rotation)
            else:
                radius = rng.rand() * min(spread_x, spread_y)
                x = center_x + radius * np.cos(angle)
                y = center_y + radius * np.sin(angle)

            x += (rng.rand() - 0.5) * 3
            y += (rng.rand() - 0.5) * 3

            points.append(Point(
                id=f"random_{cluster}_{i}",
                x=float(np.clip(x, *BOUNDS)),
                y=float(np.clip(y, *BOUNDS))
            ))
            labels.append(cluster)

    return tuple(points), np.array(labels)
