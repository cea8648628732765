"""Structured logging for chunking operations.

This module provides telemetry hooks for chunked fetches, emitting
structured log records (fixed event names plus ``extra`` fields) for
observability.
"""

from __future__ import annotations

import logging

from .definitions import ChunkResult

logger = logging.getLogger(__name__)


def log_chunk_plan(
    *,
    total_values: int,
    chunk_size: int,
    total_chunks: int,
) -> None:
    """Log chunk plan creation.

    Args:
        total_values: Number of filter values partitioned
        chunk_size: Maximum values per chunk
        total_chunks: Total number of chunks planned
    """
    logger.info(
        "chunk_plan_created",
        extra={
            "total_values": total_values,
            "chunk_size": chunk_size,
            "total_chunks": total_chunks,
        },
    )


def log_chunk_completed(
    *,
    chunk_index: int,
    rows: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single chunk.

    Args:
        chunk_index: Zero-based index of the chunk
        rows: Number of records returned for this chunk
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "chunk_completed",
        extra={
            "chunk_index": chunk_index,
            "rows": rows,
            "latency_ms": latency_ms,
        },
    )


def log_chunk_error(
    *,
    chunk_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log chunk fetch error.

    Args:
        chunk_index: Zero-based index of the chunk that failed
        error_type: Type of error (e.g., "OperationalError", "TimeoutError")
        error_message: Error message
    """
    logger.error(
        "chunk_error",
        extra={
            "chunk_index": chunk_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_chunk_cancelled(*, reason: str, chunks_completed: int) -> None:
    """Log cancellation of a chunked fetch."""
    logger.warning(
        "chunk_fetch_cancelled",
        extra={"reason": reason, "chunks_completed": chunks_completed},
    )


def log_chunk_execution_complete(*, result: ChunkResult) -> None:
    """Log completion of chunk execution.

    Args:
        result: ChunkResult from execution
    """
    logger.info(
        "chunk_execution_complete",
        extra={
            "chunks_used": result.chunks_used,
            "total_chunks": result.total_chunks,
            "total_records": result.total_records,
            "failures": len(result.failures),
            "latency_ms": result.latency_ms,
        },
    )
