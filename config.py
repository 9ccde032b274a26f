"""
Configuration settings for the k-means clustering harness.

This module centralizes all configuration parameters for training, data
generation and reporting.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Central configuration for the clustering system."""

    # =========================================================================
    # Training Preset
    # =========================================================================
    # "default", "quick" (few rounds), "thorough" (many rounds, distinct seeds)
    CLUSTERING_PRESET: str = os.getenv("CLUSTERING_PRESET", "default")

    CLUSTERING_PRESETS: dict = {
        "quick": {
            "MAX_ROUNDS": 10,
            "SAMPLE_WITH_REPLACEMENT": True,
        },
        # keeps the env/default values below
        "default": {},
        "thorough": {
            "MAX_ROUNDS": 500,
            "SAMPLE_WITH_REPLACEMENT": False,
        },
    }

    @classmethod
    def apply_preset(cls, preset: str | None = None) -> None:
        """Apply a training preset, overriding relevant parameters."""
        preset = (preset or cls.CLUSTERING_PRESET).lower()
        values = cls.CLUSTERING_PRESETS.get(preset)
        if not values:
            return
        cls.CLUSTERING_PRESET = preset
        for key, value in values.items():
            setattr(cls, key, value)

    # =========================================================================
    # Training
    # =========================================================================
    NUM_CLUSTERS: int = int(os.getenv("NUM_CLUSTERS", "2"))
    MAX_ROUNDS: int = int(os.getenv("MAX_ROUNDS", "50"))

    # Unset means a fresh process-seeded source on every run
    RANDOM_SEED: int | None = int(os.environ["RANDOM_SEED"]) if os.getenv("RANDOM_SEED") else None

    # Duplicate starting centroids are possible when True
    SAMPLE_WITH_REPLACEMENT: bool = _env_flag("SAMPLE_WITH_REPLACEMENT", "true")

    # =========================================================================
    # Observations
    # =========================================================================
    USE_SYNTHETIC_DATA: bool = _env_flag("USE_SYNTHETIC_DATA", "false")
    NUM_SAMPLES: int = int(os.getenv("NUM_SAMPLES", "200"))
    NUM_FEATURES: int = int(os.getenv("NUM_FEATURES", "2"))
    BLOB_SPREAD: float = float(os.getenv("BLOB_SPREAD", "1.0"))
    DATA_SEED: int = int(os.getenv("DATA_SEED", "42"))

    # =========================================================================
    # Reporting
    # =========================================================================
    VERBOSE: bool = _env_flag("VERBOSE", "true")

    @classmethod
    def validate(cls) -> None:
        """Raise ValueError when a setting cannot be used for training."""
        if cls.NUM_CLUSTERS < 1:
            raise ValueError(f"NUM_CLUSTERS must be at least 1, got {cls.NUM_CLUSTERS}")
        if cls.MAX_ROUNDS < 0:
            raise ValueError(f"MAX_ROUNDS must not be negative, got {cls.MAX_ROUNDS}")
        if cls.USE_SYNTHETIC_DATA and cls.NUM_FEATURES < 1:
            raise ValueError(f"NUM_FEATURES must be at least 1, got {cls.NUM_FEATURES}")
