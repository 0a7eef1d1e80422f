import pytest

from kmeans_lab.utils import points_from_xy


@pytest.fixture
def unit_square():
    return points_from_xy([(0, 0), (0, 1), (1, 0), (1, 1)])


@pytest.fixture
def separated_pairs():
    """Two tight pairs far apart on the x axis."""
    return points_from_xy([(0, 0), (0, 1), (10, 0), (10, 1)])


@pytest.fixture
def three_blobs():
    """Three tight groups of four points around (0, 0), (100, 0) and (0, 100)."""
    offsets = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
    centers = [(0, 0), (100, 0), (0, 100)]
    return points_from_xy([(cx + dx, cy + dy) for cx, cy in centers for dx, dy in offsets])
