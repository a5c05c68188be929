from .collect import CollectedFile, CollectOptions, FilePolicy, collect, join_results
from .errors import (
    ClipfilError,
    CollectError,
    ConfigError,
    DecodeError,
    FileAccessError,
    ListingError,
    StagingError,
)

__version__ = "0.1.0"

__all__ = [
    "CollectedFile",
    "CollectOptions",
    "FilePolicy",
    "collect",
    "join_results",
    "ClipfilError",
    "CollectError",
    "ConfigError",
    "DecodeError",
    "FileAccessError",
    "ListingError",
    "StagingError",
]
