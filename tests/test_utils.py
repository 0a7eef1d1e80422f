import io

import numpy as np
import pandas as pd
import pytest

from kmeans_lab import initialize, run_to_convergence
from kmeans_lab.utils import (
    calculate_cluster_metrics, centroids_to_dataframe, download_df, format_metrics_for_display,
    generate_random_dataset, load_file, points_from_dataframe, points_from_xy,
    points_to_dataframe, scale_points, state_metrics
)


def test_points_from_xy_assigns_sequential_ids():
    points = points_from_xy([(1, 2), (3, 4)])
    assert [p.id for p in points] == ['1', '2']
    assert (points[1].x, points[1].y) == (3.0, 4.0)
    assert all(p.cluster is None for p in points)


def test_points_from_xy_validates_ids():
    with pytest.raises(ValueError):
        points_from_xy([(0, 0), (1, 1)], ids=['a'])
    with pytest.raises(ValueError):
        points_from_xy([(0, 0), (1, 1)], ids=['a', 'a'])


def test_points_from_dataframe_drops_missing_rows():
    df = pd.DataFrame({'age': [25, 30, None], 'spend': [80, 20, 50], 'name': ['a', 'b', 'c']})
    points = points_from_dataframe(df, x='age', y='spend', id_column='name')

    assert [p.id for p in points] == ['a', 'b']
    assert points[0].x == 25.0


def test_points_from_dataframe_missing_column():
    with pytest.raises(ValueError, match="Missing columns"):
        points_from_dataframe(pd.DataFrame({'x': [1]}))


def test_load_file_reads_csv():
    points = load_file(io.StringIO("x,y\n1,2\n3,4\n"))
    assert len(points) == 2
    assert points[1].y == 4.0


def test_state_exports(unit_square):
    state = run_to_convergence(initialize(unit_square, 2, 'grid'))

    points_df = points_to_dataframe(state)
    assert points_df['cluster'].tolist() == [0, 0, 1, 1]

    centroids_df = centroids_to_dataframe(state)
    assert centroids_df['size'].tolist() == [2, 2]
    assert centroids_df['x'].tolist() == [0.0, 1.0]

    assert download_df(points_df).startswith(b'id,x,y,cluster')


def test_point_export_before_assignment(unit_square):
    df = points_to_dataframe(initialize(unit_square, 2, 'grid'))
    assert df['cluster'].isna().all()


def test_cluster_metrics_need_two_clusters():
    metrics = calculate_cluster_metrics(np.zeros((3, 2)), np.array([0, 0, 0]))
    assert not metrics['valid']
    assert metrics['n_clusters'] == 1


def test_state_metrics(three_blobs):
    state = run_to_convergence(initialize(three_blobs, 3, 'grid'))
    metrics = state_metrics(state)

    assert metrics['valid']
    assert metrics['wcss'] == pytest.approx(24.0)
    assert metrics['status'] == 'converged'

    formatted = format_metrics_for_display(metrics)
    assert formatted['Converged'] == 'Yes'
    assert formatted['WCSS'] == '24.00'


def test_scale_points(three_blobs):
    scaled, scaler = scale_points(three_blobs)
    coords = np.array([[p.x, p.y] for p in scaled])

    assert [p.id for p in scaled] == [p.id for p in three_blobs]
    assert coords.mean(axis=0) == pytest.approx([0, 0], abs=1e-9)
    assert coords.std(axis=0) == pytest.approx([1, 1])
    assert scaler.mean_.shape == (2,)


def test_scale_points_rejects_empty():
    with pytest.raises(ValueError):
        scale_points(())


def test_random_dataset_shape():
    points, labels = generate_random_dataset(random_state=3)
    n_clusters = len(set(labels))

    assert 2 <= n_clusters <= 4
    assert len(points) == len(labels)
    assert 8 <= len(points) // n_clusters <= 22
    assert all(5 <= p.x <= 95 and 5 <= p.y <= 95 for p in points)
    assert len({p.id for p in points}) == len(points)


def test_random_dataset_is_reproducible():
    first, _ = generate_random_dataset(random_state=8)
    second, _ = generate_random_dataset(random_state=8)
    assert first == second


def test_state_metrics_wcss_after_drag(unit_square):
    from kmeans_lab import set_centroid_position, step

    state = step(initialize(unit_square, 2, 'grid'))
    moved = set_centroid_position(state, 'centroid_0', 5, 5)
    assert state_metrics(moved)['wcss'] == pytest.approx(3.0)
