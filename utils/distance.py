"""Distance helpers - squared Euclidean distance and nearest-centroid lookup."""
from __future__ import annotations

from typing import Sequence


def squared_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Sum of squared coordinate differences (no square root, ordering is all we need)."""
    return sum((x - y) ** 2 for x, y in zip(a, b))


def nearest_index(query: Sequence[float], candidates: Sequence[Sequence[float]]) -> int:
    """
    Find the candidate closest to a query point.

    Args:
        query: The point to classify
        candidates: Non-empty sequence of points with the query's dimensionality

    Returns:
        Index of the nearest candidate. Ties go to the lowest index.
    """
    if len(candidates) == 0:
        raise ValueError("nearest_index requires at least one candidate")

    best_index = 0
    best_dist = squared_distance(query, candidates[0])
    for i in range(1, len(candidates)):
        dist = squared_distance(query, candidates[i])
        if dist < best_dist:
            best_dist = dist
            best_index = i

    return best_index


def assign_all(points: Sequence[Sequence[float]], centroids: Sequence[Sequence[float]]) -> list[int]:
    """Label every point with the index of its nearest centroid."""
    return [nearest_index(point, centroids) for point in points]
