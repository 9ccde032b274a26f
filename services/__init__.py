"""Service layer for clustering and reporting."""
