"""Chunk planning logic for partitioning filter values.

This module provides the ChunkPlanner class that splits a filter-value set
into consecutive, bounded chunks that respect a data source's per-query
list limit.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

from .definitions import ChunkPlan, ChunkPolicy
from .telemetry import log_chunk_plan

U = TypeVar("U")


def partition(values: Iterable[U], size: int) -> Iterator[list[U]]:
    """Yield consecutive lists of up to ``size`` values (last may be smaller)."""
    buf: list[U] = []
    for value in values:
        buf.append(value)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf


class ChunkPlanner:
    """Plans chunks for a filter-value set.

    Every input value lands in exactly one chunk, chunk order follows input
    order, and no chunk exceeds the policy's chunk size.
    """

    def __init__(self, policy: ChunkPolicy) -> None:
        """Initialize chunk planner.

        Args:
            policy: Chunking policy bounding each chunk
        """
        self._policy = policy

    @property
    def policy(self) -> ChunkPolicy:
        return self._policy

    def plan(self, values: Iterable[Any]) -> list[ChunkPlan]:
        """Plan chunks for a filter-value set.

        Args:
            values: Filter values, consumed once

        Returns:
            List of chunk plans (empty when there are no values)
        """
        groups = list(partition(values, self._policy.chunk_size))
        total_chunks = len(groups)
        plans = [
            ChunkPlan(chunk_index=index, values=tuple(group), total_chunks=total_chunks)
            for index, group in enumerate(groups)
        ]

        log_chunk_plan(
            total_values=sum(plan.size for plan in plans),
            chunk_size=self._policy.chunk_size,
            total_chunks=total_chunks,
        )

        return plans
