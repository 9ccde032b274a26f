"""Cluster model - a trained centroid and the points assigned to it."""
from utils.distance import squared_distance


class Cluster:
    """A group of points that share the same nearest centroid."""

    def __init__(self, id, center):
        self.id = id
        self.center = center
        self.points = []
        self.point_ids = []

    def add_point(self, point, point_id=None):
        """Add a point to this cluster."""
        self.points.append(point)
        self.point_ids.append(point_id if point_id is not None else len(self.point_ids))

    def is_empty(self):
        return len(self.points) == 0

    def get_point_count(self):
        """Return count of points in this cluster."""
        return len(self.points)

    def get_inertia(self):
        """Sum of squared distances from members to the center."""
        return sum(squared_distance(point, self.center) for point in self.points)

    def get_radius(self):
        """Largest Euclidean distance from a member to the center."""
        if self.is_empty():
            return 0.0
        return max(squared_distance(point, self.center) for point in self.points) ** 0.5

    def get_stats(self):
        """Return statistics about this cluster."""
        stats = {
            'id': self.id,
            'center': list(self.center),
            'n_points': self.get_point_count(),
            'is_empty': self.is_empty(),
            'inertia': self.get_inertia(),
            'radius': self.get_radius(),
        }

        if not self.is_empty():
            stats['avg_sq_distance'] = stats['inertia'] / stats['n_points']

        return stats

    def __repr__(self):
        return f"Cluster(id={self.id}, points={len(self.points)})"

    def __str__(self):
        center = ", ".join(f"{c:.3f}" for c in self.center)
        return f"Cluster {self.id + 1}: {self.get_point_count()} points around [{center}]"
