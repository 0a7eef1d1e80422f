"""
kmeans-lab: the computational core of an interactive K-Means lesson.

Entry points used by a rendering layer:

    initialize(points, k, strategy)            -> ClusteringState
    step(state)                                -> ClusteringState
    run_to_convergence(state, max_iterations, on_iteration)
    set_centroid_position(state, centroid_id, x, y)
    compute_wcss(points, centroids)            -> float
    run_elbow_analysis(points, max_k, strategy) -> [ElbowResult]
"""

# models must be imported before utils
from kmeans_lab.models import (
    Point, Centroid, ClusteringState, ElbowResult, InitStrategy, Status,
    KMeansRunner, ElbowAnalyzer, KMeansModel,
    initialize, step, iterate, run_to_convergence, set_centroid_position,
    run_elbow_analysis, get_initializer, list_initializers
)
from kmeans_lab.models.steps import compute_wcss, distance
from kmeans_lab.exceptions import (
    InsufficientDataError, InvalidCentroidReference, EmptyClusterWarning, NonConvergenceWarning
)
from kmeans_lab.utils import points_from_xy, points_from_dataframe, generate_random_dataset

__version__ = "0.1.0"

__all__ = [
    'Point',
    'Centroid',
    'ClusteringState',
    'ElbowResult',
    'InitStrategy',
    'Status',
    'KMeansRunner',
    'ElbowAnalyzer',
    'KMeansModel',
    'initialize',
    'step',
    'iterate',
    'run_to_convergence',
    'set_centroid_position',
    'compute_wcss',
    'distance',
    'run_elbow_analysis',
    'get_initializer',
    'list_initializers',
    'InsufficientDataError',
    'InvalidCentroidReference',
    'EmptyClusterWarning',
    'NonConvergenceWarning',
    'points_from_xy',
    'points_from_dataframe',
    'generate_random_dataset',
]
