"""Core components."""

from .enums import DEFAULT_CHUNK_SIZE, DataSourceLimit, chunk_size_for
from .exceptions import (
    ChunkFetchError,
    ConfigurationError,
    DataSourceError,
    FetchCancelledError,
    FetchError,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DataSourceLimit",
    "chunk_size_for",
    "FetchError",
    "ConfigurationError",
    "ChunkFetchError",
    "FetchCancelledError",
    "DataSourceError",
]
