"""High-level API facades."""

from .fetcher import (
    ChunkedFetcher,
    fetch_in_chunks,
    fetch_in_chunks_result,
    fetch_in_chunks_sync,
)

__all__ = [
    "ChunkedFetcher",
    "fetch_in_chunks",
    "fetch_in_chunks_result",
    "fetch_in_chunks_sync",
]
