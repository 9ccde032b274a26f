"""KMeans engine - Lloyd's algorithm with uniform random seeding."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from utils.distance import assign_all, nearest_index, squared_distance


EPSILON: float = float(np.finfo(float).eps)

RandomSource = Union[random.Random, int, None]


# =============================================================================
# Result Types
# =============================================================================

@dataclass
class Trained:
    """Successful training run."""
    centroids: list[list[float]]
    rounds: int
    converged: bool


@dataclass
class Infeasible:
    """Training could not start; `reason` says which precondition failed."""
    reason: str


@dataclass
class RunState:
    centroids: list[list[float]]
    movement: bool = True
    round: int = 0
    history: list[bool] = field(default_factory=list)


# =============================================================================
# Point Helpers
# =============================================================================

def equal(a: Sequence[float], b: Sequence[float]) -> bool:
    """Two points are equal when every coordinate differs by at most machine epsilon."""
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if abs(x - y) > EPSILON:
            return False
    return True


def mean_point(group: Sequence[Sequence[float]]) -> list[float]:
    """Coordinate-wise arithmetic mean of a non-empty group of points."""
    if len(group) == 0:
        raise ValueError("mean_point requires a non-empty group")

    sums = [0.0] * len(group[0])
    for point in group:
        for j, value in enumerate(point):
            sums[j] += value

    size = len(group)
    return [total / size for total in sums]


def _resolve_rng(rng: RandomSource) -> random.Random:
    if rng is None:
        return random.Random()
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def init_centroids(points, cluster_count, rng: RandomSource = None, replace=True):
    """
    Pick starting centroids uniformly at random from the input points.

    Args:
        points: Input points
        cluster_count: Number of centroids to draw
        rng: random.Random instance, integer seed, or None for a fresh source
        replace: Draw with replacement (duplicates possible). With False the
            draws are distinct indices, so duplicate seeds only come from
            duplicate input points.

    Returns:
        List of centroid copies
    """
    rng = _resolve_rng(rng)
    n = len(points)

    if replace:
        indices = [rng.randrange(n) for _ in range(cluster_count)]
    else:
        indices = rng.sample(range(n), cluster_count)

    return [[float(x) for x in points[i]] for i in indices]


def check_feasible(points, cluster_count) -> Infeasible | None:
    """Return an Infeasible result when training cannot start, else None."""
    if cluster_count < 1:
        return Infeasible(f"cluster_count must be positive, got {cluster_count}")
    if len(points) < cluster_count:
        return Infeasible(f"{len(points)} points cannot form {cluster_count} clusters")

    dim = len(points[0])
    if dim < 1:
        return Infeasible("points must have at least one coordinate")
    for i, point in enumerate(points):
        if len(point) != dim:
            return Infeasible(f"point {i} has {len(point)} coordinates, expected {dim}")

    return None


# =============================================================================
# Training Loop
# =============================================================================

def run_rounds(points, centroids, max_rounds) -> RunState:
    """
    Refine centroids until a round moves nothing or max_rounds is reached.

    Clusters that receive no points keep their previous centroid and do not
    count as movement.
    """
    state = RunState(centroids=[list(c) for c in centroids])
    k = len(state.centroids)

    while state.round < max_rounds and state.movement:
        state.movement = False

        buckets = [[] for _ in range(k)]
        for point in points:
            buckets[nearest_index(point, state.centroids)].append(list(point))

        for i, bucket in enumerate(buckets):
            if not bucket:
                continue
            new_centroid = mean_point(bucket)
            if not equal(state.centroids[i], new_centroid):
                state.centroids[i] = new_centroid
                state.movement = True

        state.round += 1
        state.history.append(state.movement)

    return state


def fit(points, cluster_count, max_rounds, rng: RandomSource = None, replace=True) -> Trained | Infeasible:
    """Train centroids, returning Trained on success or Infeasible on bad input."""
    points = list(points)
    problem = check_feasible(points, cluster_count)
    if problem is not None:
        return problem

    centroids = init_centroids(points, cluster_count, rng=rng, replace=replace)
    state = run_rounds(points, centroids, max_rounds)

    converged = bool(state.history) and not state.history[-1]
    return Trained(centroids=state.centroids, rounds=state.round, converged=converged)


def train(points, cluster_count, max_rounds, rng: RandomSource = None, replace=True):
    """
    Partition points into cluster_count clusters with Lloyd's algorithm.

    Returns:
        List of cluster_count centroids, or None when there are fewer points
        than clusters or the points disagree on dimensionality.
    """
    result = fit(points, cluster_count, max_rounds, rng=rng, replace=replace)
    if isinstance(result, Infeasible):
        return None
    return result.centroids


# =============================================================================
# KMeans Clusterer
# =============================================================================

class KMeansClusterer:
    """KMeans clustering wrapper with an sklearn-style interface."""

    def __init__(self, n_clusters=5, max_rounds=50, random_state=None, replace=True):
        self.n_clusters = n_clusters
        self.max_rounds = max_rounds
        self.random_state = random_state
        self.replace = replace
        self.cluster_centers_ = None
        self.labels_ = None
        self.inertia_ = None
        self.n_iter_ = None
        self.converged_ = None

    def fit(self, X):
        """
        Fit centroids to the rows of X.

        Args:
            X: Array-like of shape (n_samples, n_features)

        Returns:
            self
        """
        points = _as_points(X)
        result = fit(points, self.n_clusters, self.max_rounds,
                     rng=self.random_state, replace=self.replace)
        if isinstance(result, Infeasible):
            raise ValueError(f"Cannot fit KMeans: {result.reason}")

        labels = assign_all(points, result.centroids)

        self.cluster_centers_ = np.array(result.centroids, dtype=float)
        self.labels_ = np.array(labels, dtype=int)
        self.inertia_ = float(sum(
            squared_distance(point, result.centroids[label])
            for point, label in zip(points, labels)
        ))
        self.n_iter_ = result.rounds
        self.converged_ = result.converged

        return self

    def predict(self, X):
        """Assign each row of X to its nearest fitted centroid."""
        if self.cluster_centers_ is None:
            raise ValueError("KMeansClusterer is not fitted yet")
        return np.array(assign_all(_as_points(X), self.cluster_centers_.tolist()), dtype=int)

    def fit_predict(self, X):
        return self.fit(X).labels_


def _as_points(X):
    return np.asarray(X, dtype=float).tolist()
