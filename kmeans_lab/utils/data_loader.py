"""Data loading and export utilities for kmeans-lab."""

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from kmeans_lab.models.state import ClusteringState, Point


def points_from_xy(coords: Iterable[Tuple[float, float]], ids: Optional[Sequence[str]] = None) -> Tuple[Point, ...]:
    """
    Build points from (x, y) pairs.

    Args:
        coords: Iterable of (x, y) pairs
        ids: Optional ids, one per pair; defaults to "1".."n"

    Returns:
        tuple of unlabelled Points
    """
    coords = list(coords)
    if ids is None:
        ids = [str(i + 1) for i in range(len(coords))]
    elif len(ids) != len(coords):
        raise ValueError(f"Got {len(ids)} ids for {len(coords)} points")
    if len(set(ids)) != len(ids):
        raise ValueError("Point ids must be unique")

    return tuple(Point(id=str(pid), x=float(x), y=float(y)) for pid, (x, y) in zip(ids, coords))


def points_from_array(X: np.ndarray) -> Tuple[Point, ...]:
    """Build points from an array of shape (n_points, 2)."""
    X = np.asarray(X, dtype=float)
    if X.ndim != 2 or X.shape[1] != 2:
        raise ValueError(f"Expected an array of shape (n_points, 2), got {X.shape}")
    return points_from_xy(X.tolist())


def points_from_dataframe(df: pd.DataFrame, x: str = 'x', y: str = 'y',
                          id_column: Optional[str] = None) -> Tuple[Point, ...]:
    """
    Build points from two numeric DataFrame columns.

    Rows with a missing coordinate are dropped.

    Args:
        df: pandas DataFrame
        x: Column holding the horizontal coordinate
        y: Column holding the vertical coordinate
        id_column: Optional column holding point ids

    Returns:
        tuple of unlabelled Points
    """
    missing = [col for col in (x, y, id_column) if col is not None and col not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {missing}. Available: {list(df.columns)}")

    clean = df.dropna(subset=[x, y])
    ids = clean[id_column].astype(str).tolist() if id_column else None
    return points_from_xy(zip(clean[x], clean[y]), ids)


def load_file(path_or_buffer, x: str = 'x', y: str = 'y', id_column: Optional[str] = None) -> Tuple[Point, ...]:
    """
    Load points from a CSV file.

    Args:
        path_or_buffer: Path or file-like object accepted by pandas.read_csv

    Returns:
        tuple of unlabelled Points
    """
    df = pd.read_csv(path_or_buffer)
    return points_from_dataframe(df, x, y, id_column)


def points_to_dataframe(state: ClusteringState) -> pd.DataFrame:
    """
    Tabulate a state's points with their current cluster labels.

    Returns:
        DataFrame with columns: id, x, y, cluster (nullable integer)
    """
    df = pd.DataFrame(
        [{'id': p.id, 'x': p.x, 'y': p.y, 'cluster': p.cluster} for p in state.points],
        columns=['id', 'x', 'y', 'cluster']
    )
    df['cluster'] = df['cluster'].astype('Int64')
    return df


def centroids_to_dataframe(state: ClusteringState) -> pd.DataFrame:
    """
    Tabulate a state's centroids with their sizes.

    Returns:
        DataFrame with columns: cluster, id, x, y, previous_x, previous_y, size
    """
    sizes = pd.Series([p.cluster for p in state.points if p.cluster is not None], dtype=int).value_counts()
    rows = []
    for c in state.centroids:
        rows.append({
            'cluster': c.cluster_index,
            'id': c.id,
            'x': c.x,
            'y': c.y,
            'previous_x': c.previous_x,
            'previous_y': c.previous_y,
            'size': int(sizes.get(c.cluster_index, 0))
        })
    return pd.DataFrame(rows, columns=['cluster', 'id', 'x', 'y', 'previous_x', 'previous_y', 'size'])


def download_df(df):
    """
    Convert DataFrame to CSV bytes for download.

    Args:
        df: pandas DataFrame

    Returns:
        bytes: CSV encoded as UTF-8
    """
    return df.to_csv(index=False).encode('utf-8')
