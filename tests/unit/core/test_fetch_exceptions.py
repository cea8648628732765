"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from chunkfetch.core import (
    ChunkFetchError,
    ConfigurationError,
    DataSourceError,
    FetchCancelledError,
    FetchError,
)


def test_chunk_fetch_error_with_chunk_context():
    """Test ChunkFetchError carries chunk position and cause."""
    cause = ConnectionError("lost connection")
    error = ChunkFetchError(
        "chunk failed",
        chunk_index=2,
        values=(7, 8, 9),
        total_chunks=4,
        cause=cause,
    )
    assert error.chunk_index == 2
    assert error.chunk_number == 3
    assert error.chunk_size == 3
    assert error.total_chunks == 4
    assert error.cause is cause
    assert isinstance(error, FetchError)


def test_cancelled_error_is_not_a_fetch_failure():
    """Test cancellation is distinguishable from a failed query."""
    error = FetchCancelledError("deadline", reason="timeout", chunks_completed=5)
    assert error.reason == "timeout"
    assert error.chunks_completed == 5
    assert isinstance(error, FetchError)
    assert not isinstance(error, ChunkFetchError)


def test_configuration_error_names_field():
    """Test ConfigurationError with field (meaningful behavior)."""
    error = ConfigurationError("chunk_size must be >= 1", field="chunk_size")
    assert str(error) == "chunk_size must be >= 1"
    assert error.field == "chunk_size"
    assert isinstance(error, FetchError)


def test_data_source_error_with_status_code():
    """Test DataSourceError with status_code (meaningful behavior)."""
    error = DataSourceError("error", status_code=503)
    assert error.status_code == 503
    assert isinstance(error, FetchError)
