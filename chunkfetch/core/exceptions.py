"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class FetchError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(FetchError):
    """Invalid chunking configuration.

    Raised before any fetch is attempted, e.g. for a chunk size below one.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ChunkFetchError(FetchError):
    """A single chunk's fetch failed.

    The whole operation is aborted; results from chunks that already
    completed are discarded. The underlying exception is chained as
    ``__cause__`` and also kept on ``cause``.

    ``chunk_index`` is zero-based, matching ``ChunkPlan.chunk_index``;
    ``chunk_number`` is the one-based position used in the message
    ("Chunk 2 of 3" has ``chunk_index`` 1 and ``chunk_number`` 2).
    """

    def __init__(
        self,
        message: str,
        *,
        chunk_index: int,
        values: tuple[Any, ...],
        total_chunks: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index
        self.values = values
        self.total_chunks = total_chunks
        self.cause = cause

    @property
    def chunk_number(self) -> int:
        """One-based position of the failing chunk."""
        return self.chunk_index + 1

    @property
    def chunk_size(self) -> int:
        return len(self.values)


class FetchCancelledError(FetchError):
    """Chunked fetch was cancelled or ran past its deadline.

    Kept distinct from ``ChunkFetchError`` so callers can tell
    "cancelled / timed out" apart from "query failed".
    """

    def __init__(
        self,
        message: str,
        reason: str = "cancelled",
        chunks_completed: int = 0,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.chunks_completed = chunks_completed


class DataSourceError(FetchError):
    """Error from a bundled data-source adapter."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
