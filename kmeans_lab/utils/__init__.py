"""Utility modules for kmeans-lab."""

from .data_loader import (
    points_from_xy, points_from_array, points_from_dataframe, load_file,
    points_to_dataframe, centroids_to_dataframe, download_df
)
from .datasets import generate_random_dataset
from .preprocessing import scale_points
from .metrics import calculate_cluster_metrics, state_metrics, format_metrics_for_display

__all__ = [
    'points_from_xy',
    'points_from_array',
    'points_from_dataframe',
    'load_file',
    'points_to_dataframe',
    'centroids_to_dataframe',
    'download_df',
    'generate_random_dataset',
    'scale_points',
    'calculate_cluster_metrics',
    'state_metrics',
    'format_metrics_for_display',
]
