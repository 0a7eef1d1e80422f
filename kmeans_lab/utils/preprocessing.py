"""Optional preprocessing for point sets."""

from dataclasses import replace
from typing import Sequence, Tuple

from sklearn.preprocessing import StandardScaler

from kmeans_lab.models.state import Point
from kmeans_lab.models.steps import coordinates


def scale_points(points: Sequence[Point]) -> Tuple[Tuple[Point, ...], StandardScaler]:
    """
    Standardize both coordinates to zero mean and unit variance.

    The engine clusters raw coordinates, so axes on very different scales
    dominate the distance. Call this first when that matters. Ids are kept
    and labels are cleared.

    Args:
        points: Points to scale

    Returns:
        tuple: (scaled_points, scaler) - new Points and the fitted scaler
    """
    if len(points) == 0:
        raise ValueError("Cannot scale an empty point set")

    scaler = StandardScaler()
    scaled = scaler.fit_transform(coordinates(points))
    new_points = tuple(
        replace(p, x=float(sx), y=float(sy), cluster=None)
        for p, (sx, sy) in zip(points, scaled)
    )
    return new_points, scaler
