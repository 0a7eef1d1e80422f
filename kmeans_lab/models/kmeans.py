"""K-Means clustering model with a parameter-driven interface."""

from typing import Dict, List, Any, Optional
import numpy as np

from kmeans_lab.models.base import BaseClusterModel
from kmeans_lab.models.runner import initialize, run_to_convergence
from kmeans_lab.models.state import ClusteringState, InitStrategy, Status
from kmeans_lab.models.steps import coordinates
from kmeans_lab.utils.data_loader import points_from_array


class KMeansModel(BaseClusterModel):
    """
    K-Means clustering algorithm.

    Partitions 2D points into k clusters by minimizing within-cluster variance.
    Good for spherical, evenly-sized clusters.
    """

    name = "K-Means"
    description = "Partition-based clustering that minimizes within-cluster variance"

    def __init__(self):
        super().__init__()
        self.state: ClusteringState = ClusteringState.empty()
        self.params = {
            'n_clusters': 3,
            'init': InitStrategy.RANDOM.value,
            'max_iter': 20,
            'tol': 0.1,
            'random_state': 42
        }

    def get_param_config(self) -> List[Dict[str, Any]]:
        return [
            {
                'name': 'n_clusters',
                'type': 'int',
                'default': 3,
                'min': 1,
                'max': 8,
                'description': 'Number of clusters (k)'
            },
            {
                'name': 'init',
                'type': 'select',
                'default': InitStrategy.RANDOM.value,
                'options': [s.value for s in InitStrategy],
                'description': 'Initialization method'
            },
            {
                'name': 'max_iter',
                'type': 'int',
                'default': 20,
                'min': 1,
                'max': 100,
                'description': 'Maximum iterations'
            },
            {
                'name': 'tol',
                'type': 'float',
                'default': 0.1,
                'min': 0.001,
                'max': 1.0,
                'description': 'Stop when no centroid moves farther than this'
            }
        ]

    def fit_predict(self, X: np.ndarray) -> np.ndarray:
        state = initialize(
            points_from_array(X),
            self.params['n_clusters'],
            self.params['init'],
            random_state=self.params['random_state'],
            tolerance=self.params['tol'],
            max_iterations=self.params['max_iter']
        )
        self.state = run_to_convergence(state)
        self.labels_ = np.array([p.cluster for p in self.state.points], dtype=int)
        return self.labels_

    def get_state(self) -> ClusteringState:
        return self.state

    @property
    def converged(self) -> bool:
        return self.state.status is Status.CONVERGED

    def get_inertia(self) -> float:
        """Get within-cluster sum of squares (inertia)."""
        if self.state.wcss_history:
            return self.state.wcss_history[-1]
        return 0.0

    def get_cluster_centers(self) -> np.ndarray:
        """Get cluster centroids."""
        if self.state.centroids:
            return coordinates(self.state.centroids)
        return np.array([])

    def get_metrics(self, X: Optional[np.ndarray] = None, labels: Optional[np.ndarray] = None) -> Dict:
        """
        Calculate clustering metrics.

        Args:
            X: Feature array (uses the fitted points if None)
            labels: Cluster labels (uses self.labels_ if None)

        Returns:
            Dict of metrics
        """
        if X is None:
            X = coordinates(self.state.points)
        if labels is None:
            labels = self.labels_
        metrics = super().get_metrics(X, labels)
        metrics['wcss'] = self.get_inertia()
        metrics['iterations'] = self.state.iteration_count
        metrics['converged'] = self.converged
        return metrics

