"""K-Means Clustering - Main Entry Point"""
from config import Config
from services.planner import ClusterPlanner


if __name__ == "__main__":
    Config.apply_preset()
    planner = ClusterPlanner(Config)
    planner.run()
