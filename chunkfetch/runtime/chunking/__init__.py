"""Generic chunking layer for bounded "field IN (...)" fetches.

This module provides reusable chunking logic that splits a large filter-value
set into chunks sized to a data source's per-query limit, fetches each chunk,
and reassembles the results in order.

Architecture:
    The chunking layer consists of:
    - definitions.py: Chunk metadata structures (ChunkPolicy, ChunkPlan, InPredicate, ChunkResult)
    - planners.py: Chunk planning logic (partitions the filter values)
    - executors.py: Chunk execution logic (fetches and aggregates chunks)
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import (
    ChunkFailure,
    ChunkPlan,
    ChunkPolicy,
    ChunkResult,
    FieldAccessor,
    InPredicate,
    resolve_chunk_policy,
    resolve_field_accessor,
)
from .executors import ChunkExecutor, FetchPage
from .planners import ChunkPlanner, partition

__all__ = [
    "ChunkPolicy",
    "ChunkPlan",
    "ChunkResult",
    "ChunkFailure",
    "InPredicate",
    "FieldAccessor",
    "FetchPage",
    "ChunkPlanner",
    "ChunkExecutor",
    "partition",
    "resolve_chunk_policy",
    "resolve_field_accessor",
]
