"""Base classes for centroid initializers and clustering models."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from kmeans_lab.exceptions import InsufficientDataError
from kmeans_lab.models.state import Centroid, InitStrategy, Point
from kmeans_lab.models.steps import coordinates
from kmeans_lab.utils.metrics import calculate_cluster_metrics


def check_random_state(random_state: Union[None, int, np.random.RandomState]) -> np.random.RandomState:
    """Turn a seed, a RandomState or None into a RandomState."""
    if isinstance(random_state, np.random.RandomState):
        return random_state
    return np.random.RandomState(random_state)


class BaseInitializer(ABC):
    """
    Abstract base class for centroid initializers.

    Subclasses only decide where the K starting positions go; ids,
    cluster indices and input validation are handled here so every
    strategy returns centroids with the same shape.
    """

    name: str = "Base Initializer"
    description: str = "Base centroid initializer"
    strategy: InitStrategy = None
    uses_randomness: bool = True

    @abstractmethod
    def initial_positions(self, X: np.ndarray, k: int, rng: np.random.RandomState) -> np.ndarray:
        """
        Choose starting centroid coordinates.

        Args:
            X: Point coordinates, shape (n_points, 2)
            k: Number of centroids
            rng: Random source

        Returns:
            Array of shape (k, 2)
        """
        pass

    def initialize(self, points: Sequence[Point], k: int,
                   random_state: Union[None, int, np.random.RandomState] = None) -> Tuple[Centroid, ...]:
        """
        Produce K fresh centroids for the given points.

        Raises:
            ValueError: if k < 1
            InsufficientDataError: if there are fewer points than k
        """
        if k < 1:
            raise ValueError(f"Number of clusters must be at least 1, got {k}")
        if len(points) < k:
            raise InsufficientDataError(len(points), k)

        positions = self.initial_positions(coordinates(points), k, check_random_state(random_state))
        return tuple(
            Centroid(id=f"centroid_{i}", x=float(x), y=float(y), cluster_index=i)
            for i, (x, y) in enumerate(positions)
        )

    @classmethod
    def get_info(cls) -> Dict[str, str]:
        """Get initializer info for display."""
        return {
            'name': cls.name,
            'description': cls.description,
            'strategy': cls.strategy.value if cls.strategy else None,
            'uses_randomness': cls.uses_randomness
        }


class BaseClusterModel(ABC):
    """
    Abstract base class for clustering models.

    Models expose their settings as a params dict plus a UI description of
    each parameter, and return labels from fit_predict.
    """

    name: str = "Base Model"
    description: str = "Base clustering model"

    def __init__(self):
        self.labels_ = None
        self.params = {}

    @abstractmethod
    def get_param_config(self) -> List[Dict[str, Any]]:
        """
        Get parameter configuration for UI rendering.

        Returns:
            List of parameter configs, each with:
                - name: parameter name
                - type: 'int', 'float', 'select'
                - default: default value
                - min/max: for numeric types
                - options: for select type
                - description: help text
        """
        pass

    @abstractmethod
    def fit_predict(self, X: np.ndarray) -> np.ndarray:
        """
        Fit model and return cluster labels.

        Args:
            X: Array of shape (n_points, 2)

        Returns:
            Array of cluster labels
        """
        pass

    def set_params(self, **kwargs) -> None:
        """Set model parameters, ignoring unknown keys."""
        for key, value in kwargs.items():
            if key in self.params:
                self.params[key] = value

    def get_metrics(self, X: np.ndarray, labels: Optional[np.ndarray] = None) -> Dict:
        """
        Calculate clustering metrics.

        Args:
            X: Point coordinates
            labels: Cluster labels (uses self.labels_ if None)

        Returns:
            Dict of metrics
        """
        if labels is None:
            labels = self.labels_
        return calculate_cluster_metrics(X, labels)

    def get_params(self) -> Dict[str, Any]:
        """Get current parameters."""
        return self.params.copy()

    def get_params_string(self) -> str:
        """Get parameters as formatted string for display."""
        return ", ".join(f"{k}={v}" for k, v in self.params.items())

    @classmethod
    def get_info(cls) -> Dict[str, str]:
        """Get model info for display."""
        return {
            'name': cls.name,
            'description': cls.description
        }
