"""Clustering Service - handles point clustering operations."""
from core.cluster import Cluster
from utils.distance import assign_all, nearest_index
from utils.kmeans import Infeasible, fit


class ClusteringService:
    """Service for clustering observations into groups."""

    def __init__(self, config):
        self.config = config
        self.algorithm = 'kmeans'
        self.last_result = None

    def _log(self, message):
        if getattr(self.config, 'VERBOSE', True):
            print(message)

    def cluster_points(self, points, num_clusters=None, max_rounds=None, random_state=None):
        """
        Cluster points into groups.

        Args:
            points: List of points (sequences of floats)
            num_clusters: Number of clusters to create
            max_rounds: Upper bound on refinement rounds
            random_state: Seed or random.Random for centroid seeding

        Returns:
            List of Cluster objects with points assigned, or None when the
            points cannot be split into num_clusters clusters
        """
        if self.algorithm == 'kmeans':
            return self._cluster_kmeans(points, num_clusters, max_rounds, random_state)
        else:
            raise ValueError(f"Unsupported algorithm: {self.algorithm}")

    def _cluster_kmeans(self, points, num_clusters, max_rounds, random_state):
        """Perform KMeans clustering."""
        num_clusters = num_clusters if num_clusters is not None else self.config.NUM_CLUSTERS
        max_rounds = max_rounds if max_rounds is not None else self.config.MAX_ROUNDS
        if random_state is None:
            random_state = getattr(self.config, 'RANDOM_SEED', None)
        replace = getattr(self.config, 'SAMPLE_WITH_REPLACEMENT', True)

        self.last_result = fit(points, num_clusters, max_rounds, rng=random_state, replace=replace)

        if isinstance(self.last_result, Infeasible):
            self._log(f"    WARNING: clustering skipped ({self.last_result.reason})")
            return None

        if self.last_result.converged:
            self._log(f"    Converged after {self.last_result.rounds} round(s)")
        else:
            self._log(f"    Stopped after {self.last_result.rounds} round(s) without converging")

        # Create cluster objects
        clusters = [Cluster(id=i, center=center) for i, center in enumerate(self.last_result.centroids)]

        # Assign points to clusters
        for point_id, (point, cluster_id) in enumerate(zip(points, assign_all(points, self.last_result.centroids))):
            clusters[cluster_id].add_point(point, point_id)

        return clusters

    def classify(self, point, clusters):
        """Return the cluster whose center is nearest to the point."""
        index = nearest_index(point, [cluster.center for cluster in clusters])
        return clusters[index]

    def summarize(self, clusters):
        """
        Summarize a clustering.

        Returns:
            Dict with cluster count, empty clusters and total inertia
        """
        empty = [c.id for c in clusters if c.is_empty()]
        return {
            'n_clusters': len(clusters),
            'n_points': sum(c.get_point_count() for c in clusters),
            'empty_clusters': empty,
            'total_inertia': sum(c.get_inertia() for c in clusters),
            'clusters': [c.get_stats() for c in clusters],
        }
