"""Data Generator - demo observations and synthetic Gaussian blobs."""
import numpy as np
import pandas as pd


DEMO_OBSERVATIONS = [
    [20.0, 20.0, 20.0, 20.0],
    [21.0, 21.0, 21.0, 21.0],
    [100.5, 100.5, 100.5, 100.5],
    [50.1, 50.1, 50.1, 50.1],
    [64.2, 64.2, 64.2, 64.2],
]


class DataGenerator:
    """Produces observation tables for the clustering harness."""

    def __init__(self, n_features=4, spread=1.0):
        self.n_features = n_features
        self.spread = spread

    def feature_columns(self, n_features=None):
        n_features = n_features or self.n_features
        return [f"x{j}" for j in range(n_features)]

    def demo(self):
        """Return the fixed five-observation demo set as a DataFrame."""
        columns = self.feature_columns(len(DEMO_OBSERVATIONS[0]))
        df = pd.DataFrame(DEMO_OBSERVATIONS, columns=columns)
        df.insert(0, "id", np.arange(1, len(df) + 1))
        return df

    def generate(self, n=100, n_blobs=3, seed=42):
        """
        Generate n points scattered around n_blobs random centers.

        Args:
            n: Number of points to generate
            n_blobs: Number of Gaussian blobs
            seed: Random seed for reproducibility

        Returns:
            DataFrame with id, blob and one column per feature
        """
        rng = np.random.default_rng(seed)
        centers = rng.uniform(-10.0, 10.0, size=(n_blobs, self.n_features))
        blob_ids = rng.integers(0, n_blobs, size=n)
        values = centers[blob_ids] + rng.normal(0.0, self.spread, size=(n, self.n_features))

        df = pd.DataFrame(values, columns=self.feature_columns())
        df.insert(0, "id", np.arange(1, n + 1))
        df.insert(1, "blob", blob_ids)

        return df

    def to_points(self, df):
        """Extract the feature columns of a table as a list of points."""
        columns = [c for c in self.feature_columns(len(df.columns)) if c in df.columns]
        return df[columns].astype(float).values.tolist()
