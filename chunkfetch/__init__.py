"""chunkfetch - Bounded bulk fetches for data sources with IN-list limits."""

from .api import (
    ChunkedFetcher,
    fetch_in_chunks,
    fetch_in_chunks_result,
    fetch_in_chunks_sync,
)
from .core import (
    DEFAULT_CHUNK_SIZE,
    ChunkFetchError,
    ConfigurationError,
    DataSourceError,
    DataSourceLimit,
    FetchCancelledError,
    FetchError,
    chunk_size_for,
)
from .runtime.chunking import (
    ChunkFailure,
    ChunkPlan,
    ChunkPlanner,
    ChunkPolicy,
    ChunkResult,
    InPredicate,
    partition,
)
from .sources import DataSource, HTTPSource, InMemorySource

__version__ = "0.1.0"

__all__ = [
    # API
    "ChunkedFetcher",
    "fetch_in_chunks",
    "fetch_in_chunks_result",
    "fetch_in_chunks_sync",
    # Chunking
    "ChunkPolicy",
    "ChunkPlan",
    "ChunkPlanner",
    "ChunkResult",
    "ChunkFailure",
    "InPredicate",
    "partition",
    # Configuration
    "DEFAULT_CHUNK_SIZE",
    "DataSourceLimit",
    "chunk_size_for",
    # Sources
    "DataSource",
    "HTTPSource",
    "InMemorySource",
    # Exceptions
    "FetchError",
    "ConfigurationError",
    "ChunkFetchError",
    "FetchCancelledError",
    "DataSourceError",
]
