import numpy as np
import pytest

from kmeans_lab.exceptions import InsufficientDataError
from kmeans_lab.models import (
    INITIALIZER_REGISTRY, GridInitializer, InitStrategy, KMeansPlusPlusInitializer,
    RandomInitializer, get_initializer, list_initializers
)
from kmeans_lab.utils import points_from_xy


@pytest.mark.parametrize("strategy", list(InitStrategy))
def test_every_strategy_returns_k_indexed_centroids(three_blobs, strategy):
    centroids = get_initializer(strategy).initialize(three_blobs, 3, random_state=0)

    assert len(centroids) == 3
    assert [c.cluster_index for c in centroids] == [0, 1, 2]
    assert [c.id for c in centroids] == ['centroid_0', 'centroid_1', 'centroid_2']
    assert all(c.previous_x is None and c.previous_y is None for c in centroids)


@pytest.mark.parametrize("strategy", list(InitStrategy))
def test_too_few_points_fails_fast(unit_square, strategy):
    with pytest.raises(InsufficientDataError) as exc_info:
        get_initializer(strategy).initialize(unit_square, 5)
    assert exc_info.value.k == 5
    assert exc_info.value.n_points == 4


def test_zero_clusters_rejected(unit_square):
    with pytest.raises(ValueError):
        RandomInitializer().initialize(unit_square, 0)


def test_random_initializer_uses_distinct_data_points(three_blobs):
    coords = {(p.x, p.y) for p in three_blobs}
    centroids = RandomInitializer().initialize(three_blobs, 5, random_state=7)

    positions = [(c.x, c.y) for c in centroids]
    assert len(set(positions)) == 5
    assert set(positions) <= coords


def test_random_initializer_is_reproducible(three_blobs):
    first = RandomInitializer().initialize(three_blobs, 3, random_state=11)
    second = RandomInitializer().initialize(three_blobs, 3, random_state=11)
    assert first == second


@pytest.mark.parametrize("seed", range(10))
def test_kmeans_plus_plus_seeds_are_distinct(three_blobs, seed):
    centroids = KMeansPlusPlusInitializer().initialize(three_blobs, 3, random_state=seed)
    positions = {(c.x, c.y) for c in centroids}
    assert len(positions) == 3


def test_kmeans_plus_plus_handles_duplicate_points():
    points = points_from_xy([(1, 1), (1, 1), (1, 1)])
    centroids = KMeansPlusPlusInitializer().initialize(points, 3, random_state=0)
    assert all((c.x, c.y) == (1.0, 1.0) for c in centroids)


def test_grid_initializer_two_columns(unit_square):
    centroids = GridInitializer().initialize(unit_square, 2)
    assert [(c.x, c.y) for c in centroids] == [(0.25, 0.5), (0.75, 0.5)]


def test_grid_initializer_is_row_major():
    points = points_from_xy([(0, 0), (90, 0), (0, 60), (90, 60), (45, 30)])
    centroids = GridInitializer().initialize(points, 5)

    # 3 columns x 2 rows
    expected = [(15, 15), (45, 15), (75, 15), (15, 45), (45, 45)]
    for centroid, (x, y) in zip(centroids, expected):
        assert (centroid.x, centroid.y) == pytest.approx((x, y))


def test_grid_initializer_ignores_randomness(three_blobs):
    assert GridInitializer().initialize(three_blobs, 4, 1) == GridInitializer().initialize(three_blobs, 4, 2)


def test_registry_and_aliases():
    assert set(INITIALIZER_REGISTRY) == set(InitStrategy)
    assert list_initializers() == ['random', 'kmeans++', 'grid']
    assert isinstance(get_initializer('manual'), GridInitializer)
    assert isinstance(get_initializer('k-means++'), KMeansPlusPlusInitializer)
    assert isinstance(get_initializer(InitStrategy.RANDOM), RandomInitializer)


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError, match="Unknown initialization strategy"):
        get_initializer('farthest-first')


def test_initializers_accept_a_random_state_object(three_blobs):
    rng = np.random.RandomState(3)
    centroids = RandomInitializer().initialize(three_blobs, 2, rng)
    assert len(centroids) == 2


def test_get_info():
    info = GridInitializer.get_info()
    assert info['strategy'] == 'grid'
    assert info['uses_randomness'] is False
