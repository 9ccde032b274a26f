"""Cluster Planner - example caller that trains and reports a clustering."""
from services.clustering import ClusteringService
from utils.data_generator import DataGenerator


class ClusterPlanner:
    """Main orchestrator that loads observations, trains and prints the result."""

    def __init__(self, config):
        self.config = config

        # Data containers
        self.observations = None
        self.points = []
        self.clusters = []

        # Services
        self.data_generator = DataGenerator(
            n_features=getattr(config, 'NUM_FEATURES', 2),
            spread=getattr(config, 'BLOB_SPREAD', 1.0),
        )
        self.clustering_service = ClusteringService(config)

        # State
        self.stats = {}

    def _log(self, message):
        if getattr(self.config, 'VERBOSE', True):
            print(message)

    def load_observations(self):
        """Load the demo observations or generate synthetic blobs."""
        if getattr(self.config, 'USE_SYNTHETIC_DATA', False):
            count = self.config.NUM_SAMPLES
            self._log(f"[1] Generating {count} synthetic observations...")
            self.observations = self.data_generator.generate(
                n=count,
                n_blobs=self.config.NUM_CLUSTERS,
                seed=self.config.DATA_SEED,
            )
        else:
            self._log("[1] Loading demo observations...")
            self.observations = self.data_generator.demo()

        self.points = self.data_generator.to_points(self.observations)
        self._log(f"    OK: {len(self.points)} observations loaded")

        return self.points

    def create_clusters(self, num_clusters=None):
        """Train centroids and group observations around them."""
        num_clusters = num_clusters or self.config.NUM_CLUSTERS
        self._log(f"[2] Training {num_clusters} clusters (max {self.config.MAX_ROUNDS} rounds)...")

        clusters = self.clustering_service.cluster_points(self.points, num_clusters)
        if clusters is None:
            self.clusters = []
            return self.clusters

        self.clusters = clusters
        self.stats = self.clustering_service.summarize(self.clusters)
        self._log(f"    OK: {len(self.clusters)} clusters, total inertia {self.stats['total_inertia']:.3f}")

        if self.stats['empty_clusters']:
            self._log(f"    WARNING: empty clusters {[i + 1 for i in self.stats['empty_clusters']]}")

        return self.clusters

    def print_summary(self):
        """Print every centroid and the cluster each observation belongs in."""
        for cluster in self.clusters:
            print(f"centroid: {list(cluster.center)}")

        print("...")
        for point in self.points:
            cluster = self.clustering_service.classify(point, self.clusters)
            print(f"{point} belongs in cluster {cluster.id + 1}")

    def run(self):
        """Run the full pipeline."""
        self.config.validate()
        self.load_observations()
        self.create_clusters()

        if not self.clusters:
            print("No clustering produced.")
            return None

        self.print_summary()
        return self.clusters
