import random

import numpy as np
import pandas as pd
import pytest
from sklearn.cluster import KMeans as SklearnKMeans

from utils.distance import nearest_index
from utils.kmeans import (
    EPSILON,
    Infeasible,
    KMeansClusterer,
    Trained,
    equal,
    fit,
    init_centroids,
    mean_point,
    run_rounds,
    train,
)


def _blobs(seed=0):
    rng = np.random.default_rng(seed)
    X1 = rng.normal(loc=0.0, scale=0.3, size=(100, 2))
    X2 = rng.normal(loc=3.0, scale=0.3, size=(100, 2))
    return np.vstack([X1, X2])


# =============================================================================
# Preconditions
# =============================================================================

def test_train_returns_none_when_more_clusters_than_points():
    points = [[1.0, 2.0], [3.0, 4.0]]
    assert train(points, 3, 50) is None
    assert train([], 1, 50) is None


def test_train_returns_none_on_mixed_dimensionality():
    points = [[1.0, 2.0], [3.0, 4.0], [5.0]]
    assert train(points, 2, 50) is None


def test_fit_reports_reason_when_infeasible():
    result = fit([[1.0], [2.0, 3.0]], 1, 10)
    assert isinstance(result, Infeasible)
    assert "coordinates" in result.reason

    assert isinstance(fit([[1.0]], 0, 10), Infeasible)


# =============================================================================
# Helpers
# =============================================================================

def test_mean_point():
    assert mean_point([[1.0, 1.0], [3.0, 3.0], [5.0, 5.0]]) == [3.0, 3.0]


def test_mean_point_rejects_empty_group():
    with pytest.raises(ValueError):
        mean_point([])


def test_equal_within_machine_epsilon():
    assert equal([0.0, 1.0], [1e-17, 1.0])
    assert equal([2.0], [2.0 + EPSILON / 4])
    assert not equal([0.0, 1.0], [0.0, 1.0 + 1e-12])
    assert not equal([0.0], [0.0, 0.0])


def test_init_centroids_is_reproducible_with_seed():
    points = [[float(i)] for i in range(20)]
    assert init_centroids(points, 5, rng=3) == init_centroids(points, 5, rng=random.Random(3))


def test_init_centroids_copies_points():
    points = [[1.0, 2.0]]
    centroids = init_centroids(points, 1, rng=0)
    centroids[0][0] = 99.0
    assert points == [[1.0, 2.0]]


def test_init_centroids_without_replacement_is_distinct():
    points = [[float(i), float(-i)] for i in range(5)]
    centroids = init_centroids(points, 5, rng=11, replace=False)
    assert sorted(centroids) == sorted(points)


# =============================================================================
# Training Loop
# =============================================================================

def test_run_rounds_refines_until_stable():
    points = [[0.0], [1.0], [10.0], [11.0]]
    state = run_rounds(points, [[0.0], [1.0]], 50)
    assert state.centroids == [[0.5], [10.5]]
    assert state.round == 3
    assert state.history == [True, True, False]
    assert not state.movement


def test_run_rounds_respects_round_limit():
    points = [[0.0], [1.0], [10.0], [11.0]]
    state = run_rounds(points, [[0.0], [1.0]], 1)
    assert state.round == 1
    assert state.movement
    assert state.centroids[0] == [0.0]
    assert state.centroids[1] == pytest.approx([22.0 / 3.0])


def test_run_rounds_leaves_empty_cluster_in_place():
    points = [[0.0], [1.0], [2.0]]
    state = run_rounds(points, [[0.0], [100.0]], 50)
    assert state.centroids == [[1.0], [100.0]]
    assert state.round == 2


def test_zero_rounds_returns_initial_sample():
    points = [[float(i), 0.0] for i in range(10)]
    result = fit(points, 3, 0, rng=7)
    assert isinstance(result, Trained)
    assert result.rounds == 0
    assert not result.converged
    assert result.centroids == init_centroids(points, 3, rng=7)


@pytest.mark.parametrize("seed", range(10))
def test_train_converges_on_two_groups(seed):
    points = [[0.0, 0.0], [0.0, 0.0], [10.0, 10.0], [10.0, 10.0]]
    centroids = train(points, 2, 50, rng=seed)

    assert sorted(centroids) == [[0.0, 0.0], [10.0, 10.0]]

    labels = [nearest_index(p, centroids) for p in points]
    assert labels[0] == labels[1]
    assert labels[2] == labels[3]
    assert labels[0] != labels[2]


@pytest.mark.parametrize("seed", range(5))
def test_fit_never_exceeds_max_rounds(seed):
    points = _blobs(seed).tolist()
    result = fit(points, 4, 3, rng=seed)
    assert result.rounds <= 3


def test_train_output_shape():
    points = [[20.0, 20.0, 20.0, 20.0],
              [21.0, 21.0, 21.0, 21.0],
              [100.5, 100.5, 100.5, 100.5],
              [50.1, 50.1, 50.1, 50.1],
              [64.2, 64.2, 64.2, 64.2]]
    centroids = train(points, 2, 50)
    assert len(centroids) == 2
    assert all(len(c) == 4 for c in centroids)


def test_train_does_not_mutate_input():
    points = [[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]]
    train(points, 2, 50, rng=1)
    assert points == [[0.0, 1.0], [2.0, 3.0], [4.0, 5.0]]


# =============================================================================
# KMeans Clusterer
# =============================================================================

def test_kmeans_clusterer_fits_simple_blobs():
    X = _blobs()
    km = KMeansClusterer(n_clusters=2, random_state=0).fit(X)

    assert km.cluster_centers_.shape == (2, 2)
    assert len(km.labels_) == X.shape[0]
    assert km.n_iter_ <= 50
    assert km.converged_

    expected = sum(float(np.sum((x - km.cluster_centers_[l]) ** 2)) for x, l in zip(X, km.labels_))
    assert km.inertia_ == pytest.approx(expected)
    assert np.array_equal(km.predict(X), km.labels_)


def test_kmeans_clusterer_raises_on_infeasible_input():
    with pytest.raises(ValueError):
        KMeansClusterer(n_clusters=3).fit(np.zeros((2, 2)))


def test_kmeans_clusterer_predict_requires_fit():
    with pytest.raises(ValueError):
        KMeansClusterer(n_clusters=2).predict([[0.0, 0.0]])


def test_matches_sklearn_on_separated_blobs():
    X = _blobs(1)

    ours = min(
        (KMeansClusterer(n_clusters=2, random_state=s, replace=False).fit(X) for s in range(5)),
        key=lambda km: km.inertia_,
    )
    theirs = SklearnKMeans(n_clusters=2, random_state=0, n_init=10).fit(X)

    ours_sorted = ours.cluster_centers_[np.argsort(ours.cluster_centers_[:, 0])]
    theirs_sorted = theirs.cluster_centers_[np.argsort(theirs.cluster_centers_[:, 0])]
    assert np.allclose(ours_sorted, theirs_sorted, atol=1e-6)


def test_kmeans_clusterer_accepts_dataframe():
    df = pd.DataFrame([[0.0, 0.0], [0.1, 0.0], [10.0, 10.0], [10.1, 10.0]], columns=["x0", "x1"])
    km = KMeansClusterer(n_clusters=2, random_state=2, replace=False).fit(df)

    assert km.cluster_centers_.shape == (2, 2)
    assert km.labels_[0] == km.labels_[1]
    assert km.labels_[2] == km.labels_[3]
    assert km.labels_[0] != km.labels_[2]
    assert np.array_equal(km.predict(df), km.labels_)


def test_kmeans_clusterer_accepts_list_of_lists():
    X = [[0.0, 0.0], [0.1, 0.0], [10.0, 10.0], [10.1, 10.0]]
    km = KMeansClusterer(n_clusters=2, random_state=2, replace=False).fit(X)

    assert km.cluster_centers_.shape == (2, 2)
    assert len(km.labels_) == 4
    assert km.labels_[0] != km.labels_[2]
