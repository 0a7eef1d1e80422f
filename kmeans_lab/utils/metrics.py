"""Clustering evaluation metrics."""

import numpy as np
from sklearn.metrics import (
    silhouette_score,
    davies_bouldin_score,
    calinski_harabasz_score
)

from kmeans_lab.models.state import ClusteringState
from kmeans_lab.models.steps import coordinates


def calculate_cluster_metrics(X, labels):
    """
    Calculate clustering evaluation metrics.

    Args:
        X: Point coordinates, shape (n_points, 2)
        labels: Cluster labels

    Returns:
        dict with metrics:
            - silhouette: Silhouette Score (-1 to 1, higher is better)
            - davies_bouldin: Davies-Bouldin Index (lower is better)
            - calinski_harabasz: Calinski-Harabasz Index (higher is better)
            - n_clusters: Number of non-empty clusters
            - valid: False when the scores are undefined
    """
    X = np.asarray(X, dtype=float)
    labels = np.asarray(labels)
    n_clusters = len(np.unique(labels))

    # Scores need 2 <= n_clusters <= n_samples - 1
    if n_clusters < 2 or n_clusters >= len(labels):
        return {
            'silhouette': 0.0,
            'davies_bouldin': float('inf'),
            'calinski_harabasz': 0.0,
            'n_clusters': n_clusters,
            'valid': False
        }

    return {
        'silhouette': round(float(silhouette_score(X, labels)), 4),
        'davies_bouldin': round(float(davies_bouldin_score(X, labels)), 4),
        'calinski_harabasz': round(float(calinski_harabasz_score(X, labels)), 4),
        'n_clusters': n_clusters,
        'valid': True
    }


def state_metrics(state: ClusteringState):
    """
    Metrics for the labels held by a clustering state.

    Unlabelled points are left out of the scores. WCSS, iteration count and
    status are reported alongside.
    """
    labelled = [p for p in state.points if p.cluster is not None]
    metrics = calculate_cluster_metrics(
        coordinates(labelled),
        np.array([p.cluster for p in labelled], dtype=int)
    )
    metrics['wcss'] = state.current_wcss
    metrics['iterations'] = state.iteration_count
    metrics['status'] = state.status.value
    return metrics


def format_metrics_for_display(metrics):
    """
    Format metrics dictionary for display.

    Args:
        metrics: dict from calculate_cluster_metrics or state_metrics

    Returns:
        dict with formatted strings
    """
    formatted = {
        'Silhouette Score': f"{metrics['silhouette']:.4f}",
        'Davies-Bouldin Index': f"{metrics['davies_bouldin']:.4f}",
        'Calinski-Harabasz Index': f"{metrics['calinski_harabasz']:.2f}",
        'Clusters Found': metrics['n_clusters']
    }
    if 'wcss' in metrics:
        formatted['WCSS'] = f"{metrics['wcss']:.2f}"
    if 'status' in metrics:
        formatted['Converged'] = 'Yes' if metrics['status'] == 'converged' else 'No'
    return formatted
