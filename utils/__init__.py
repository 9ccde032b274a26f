"""Clustering algorithms and helpers."""
from utils.distance import assign_all, nearest_index, squared_distance
from utils.kmeans import KMeansClusterer, Infeasible, Trained, fit, train

__all__ = [
    "assign_all",
    "nearest_index",
    "squared_distance",
    "KMeansClusterer",
    "Infeasible",
    "Trained",
    "fit",
    "train",
]
