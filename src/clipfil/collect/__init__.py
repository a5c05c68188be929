from .models import CollectedFile, CollectOptions, FilePolicy
from .collector import collect, join_results

__all__ = ["CollectedFile", "CollectOptions", "FilePolicy", "collect", "join_results"]
