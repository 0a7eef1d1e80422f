"""Value types shared by the clustering engine."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class Status(Enum):
    """Lifecycle of a clustering session."""
    UNINITIALIZED = 'uninitialized'
    INITIALIZED = 'initialized'
    ITERATING = 'iterating'
    CONVERGED = 'converged'
    MAX_ITERATIONS_REACHED = 'max_iterations_reached'

    @property
    def is_terminal(self) -> bool:
        return self in (Status.CONVERGED, Status.MAX_ITERATIONS_REACHED)


class InitStrategy(str, Enum):
    """Centroid initialization strategies."""
    RANDOM = 'random'
    KMEANS_PLUS_PLUS = 'kmeans++'
    GRID = 'grid'

    @classmethod
    def parse(cls, value: Union['InitStrategy', str]) -> 'InitStrategy':
        """
        Resolve a strategy from an enum member or a string tag.

        Accepts the aliases 'manual' (grid layout used for dragging) and
        'k-means++'.
        """
        if isinstance(value, cls):
            return value
        aliases = {'manual': cls.GRID, 'k-means++': cls.KMEANS_PLUS_PLUS}
        key = str(value).lower()
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            options = [s.value for s in cls] + list(aliases)
            raise ValueError(f"Unknown initialization strategy: {value}. Available: {options}")


@dataclass(frozen=True)
class Point:
    """A 2D observation, optionally labelled with a cluster index."""
    id: str
    x: float
    y: float
    cluster: Optional[int] = None

    def with_cluster(self, cluster: Optional[int]) -> 'Point':
        return replace(self, cluster=cluster)


@dataclass(frozen=True)
class Centroid:
    """
    Cluster representative.

    ``cluster_index`` is the canonical cluster identity and always equals the
    centroid's position in the state's centroid sequence. ``previous_x`` and
    ``previous_y`` hold the position before the last update that moved it.
    """
    id: str
    x: float
    y: float
    cluster_index: int
    previous_x: Optional[float] = None
    previous_y: Optional[float] = None

    def moved_to(self, x: float, y: float) -> 'Centroid':
        """Return a copy at (x, y) remembering the current position."""
        return replace(self, x=x, y=y, previous_x=self.x, previous_y=self.y)


@dataclass(frozen=True)
class ElbowResult:
    """WCSS obtained for one candidate number of clusters."""
    k: int
    wcss: float

    def to_dict(self) -> Dict[str, Any]:
        return {'k': self.k, 'wcss': self.wcss}


@dataclass(frozen=True)
class ClusteringState:
    """
    Snapshot of a clustering session.

    Every engine operation takes a state and returns a new one; nothing is
    mutated in place.
    """
    points: Tuple[Point, ...] = ()
    centroids: Tuple[Centroid, ...] = ()
    iteration_count: int = 0
    wcss_history: Tuple[float, ...] = ()
    status: Status = Status.UNINITIALIZED
    strategy: InitStrategy = InitStrategy.RANDOM
    tolerance: float = 0.1
    max_iterations: int = 20
    empty_clusters: Tuple[int, ...] = ()

    @classmethod
    def empty(cls) -> 'ClusteringState':
        return cls()

    @property
    def k(self) -> int:
        return len(self.centroids)

    @property
    def converged(self) -> bool:
        return self.status is Status.CONVERGED

    @property
    def current_wcss(self) -> float:
        """WCSS of the current labels against the current centroids."""
        from kmeans_lab.models.steps import compute_wcss
        return compute_wcss(self.points, self.centroids)

    def labels(self) -> Tuple[Optional[int], ...]:
        return tuple(p.cluster for p in self.points)

    def get_centroid(self, centroid_id: str) -> Centroid:
        for centroid in self.centroids:
            if centroid.id == centroid_id:
                return centroid
        raise KeyError(f"Unknown centroid: {centroid_id}")
