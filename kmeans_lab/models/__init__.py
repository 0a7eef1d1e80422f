"""
K-Means engine for kmeans-lab.

This package holds the clustering state types, the Lloyd iteration steps,
the centroid initializers, the runner state machine and the Elbow analysis.
Initializers share the interface defined by BaseInitializer.
"""

from typing import Union

from kmeans_lab.models.state import (
    Point, Centroid, ClusteringState, ElbowResult, InitStrategy, Status
)
from kmeans_lab.models.base import BaseInitializer, BaseClusterModel
from kmeans_lab.models.initializers import (
    RandomInitializer, KMeansPlusPlusInitializer, GridInitializer
)

# Initializer registry, one class per strategy
INITIALIZER_REGISTRY = {
    InitStrategy.RANDOM: RandomInitializer,
    InitStrategy.KMEANS_PLUS_PLUS: KMeansPlusPlusInitializer,
    InitStrategy.GRID: GridInitializer
}

# Display names for UI
INITIALIZER_NAMES = {
    InitStrategy.RANDOM: 'Random',
    InitStrategy.KMEANS_PLUS_PLUS: 'K-Means++',
    InitStrategy.GRID: 'Grid (Manual)'
}


def get_initializer(strategy: Union[InitStrategy, str]) -> BaseInitializer:
    """
    Factory function to get an initializer instance by strategy.

    Args:
        strategy: InitStrategy or tag ('random', 'kmeans++', 'grid', 'manual')

    Returns:
        Instance of the requested initializer
    """
    return INITIALIZER_REGISTRY[InitStrategy.parse(strategy)]()


def list_initializers():
    """Get list of available strategy tags."""
    return [strategy.value for strategy in INITIALIZER_REGISTRY]


from kmeans_lab.models.runner import (  # noqa: E402
    KMeansRunner, initialize, step, iterate, run_to_convergence, set_centroid_position
)
from kmeans_lab.models.elbow import ElbowAnalyzer, run_elbow_analysis  # noqa: E402
from kmeans_lab.models.kmeans import KMeansModel  # noqa: E402


__all__ = [
    'Point',
    'Centroid',
    'ClusteringState',
    'ElbowResult',
    'InitStrategy',
    'Status',
    'BaseInitializer',
    'BaseClusterModel',
    'RandomInitializer',
    'KMeansPlusPlusInitializer',
    'GridInitializer',
    'INITIALIZER_REGISTRY',
    'INITIALIZER_NAMES',
    'get_initializer',
    'list_initializers',
    'KMeansRunner',
    'initialize',
    'step',
    'iterate',
    'run_to_convergence',
    'set_centroid_position',
    'ElbowAnalyzer',
    'run_elbow_analysis',
    'KMeansModel'
]
