"""ChunkedFetcher facade for bounded bulk fetches.

The ChunkedFetcher provides a high-level interface over the chunk planner and
executor: hand it a large set of filter values and a fetch function that can
run one bounded "field IN (...)" query, and it returns the concatenated
records.

Architecture:
    This module implements the Facade pattern over the chunking layer.
    ChunkedFetcher handles:
    - Policy resolution (chunk size, concurrency, deadline, partial mode)
    - Partitioning via ChunkPlanner, before any fetch is dispatched
    - Delegation to ChunkExecutor for the actual fetches

Design Decisions:
    - The caller supplies the bounded query (``fetch_page``); the library
      never builds or parses a query language
    - Stateless between calls: the same fetcher can serve concurrent calls
    - Sync facade for callers that are not running an event loop

See Also:
    - ChunkPlanner: Partitioning of filter values
    - ChunkExecutor: Dispatch, reassembly, cancellation
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from ..runtime.chunking import (
    ChunkExecutor,
    ChunkPlan,
    ChunkPlanner,
    ChunkPolicy,
    ChunkResult,
    FetchPage,
    FieldAccessor,
    resolve_chunk_policy,
)

logger = logging.getLogger(__name__)


class ChunkedFetcher:
    """Fetches records for a large filter-value set, one bounded query per chunk.

    Example:
        >>> fetcher = ChunkedFetcher("customer_id", chunk_size=1000, max_concurrency=4)
        >>> async def fetch_page(predicate):
        ...     stmt = select(Order).where(Order.customer_id.in_(predicate.values))
        ...     return (await session.scalars(stmt)).all()
        >>> orders = await fetcher.fetch(customer_ids, fetch_page)
    """

    def __init__(
        self,
        field: FieldAccessor | str,
        *,
        policy: ChunkPolicy | None = None,
        **settings: Any,
    ) -> None:
        """Initialize the fetcher.

        Args:
            field: Accessor (or field name) selecting the filtered field of a record
            policy: Optional base ChunkPolicy
            **settings: ChunkPolicy fields overriding the base policy
                (chunk_size, max_concurrency, timeout, allow_partial)

        Raises:
            ConfigurationError: If the field or any policy setting is invalid
        """
        self._policy = resolve_chunk_policy(policy, **settings)
        self._executor = ChunkExecutor(self._policy, field)

    @property
    def policy(self) -> ChunkPolicy:
        return self._policy

    def plan(self, filter_values: Iterable[Any]) -> list[ChunkPlan]:
        """Partition filter values without fetching anything."""
        return ChunkPlanner(self._policy).plan(filter_values)

    async def fetch_result(
        self,
        filter_values: Iterable[Any],
        fetch_page: FetchPage,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ChunkResult:
        """Fetch all chunks and return the detailed result.

        Args:
            filter_values: Values to match; may be empty
            fetch_page: Runs one bounded query for an InPredicate
            cancel_event: Optional event that cancels the fetch when set

        Returns:
            ChunkResult (carries per-chunk failures in partial-results mode)

        Raises:
            ChunkFetchError: If a chunk fails and partial results are not allowed
            FetchCancelledError: If cancelled or past the policy deadline
        """
        plans = self.plan(filter_values)
        if not plans:
            logger.debug("No filter values; skipping fetch")
        return await self._executor.execute(
            plans=plans,
            fetch_page=fetch_page,
            cancel_event=cancel_event,
        )

    async def fetch(
        self,
        filter_values: Iterable[Any],
        fetch_page: FetchPage,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> list[Any]:
        """Fetch all chunks and return the concatenated records.

        Records come back in chunk order, and within a chunk in the order the
        data source returned them. Callers needing a global order sort the
        result themselves.
        """
        result = await self.fetch_result(filter_values, fetch_page, cancel_event=cancel_event)
        if result.failures:
            logger.warning(
                f"Returning partial results: {len(result.failures)} of "
                f"{result.total_chunks} chunks failed"
            )
        return result.records


async def fetch_in_chunks(
    filter_values: Iterable[Any],
    field: FieldAccessor | str,
    chunk_size: int,
    fetch_page: FetchPage,
    *,
    max_concurrency: int = 1,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> list[Any]:
    """Fetch records whose ``field`` is in ``filter_values``, one query per chunk.

    Args:
        filter_values: Values to match; empty input makes no fetch calls
        field: Accessor (or field name) selecting the filtered field
        chunk_size: Maximum values per query (at least 1)
        fetch_page: Runs one bounded query for an InPredicate
        max_concurrency: Maximum fetches in flight (1 = sequential)
        timeout: Deadline in seconds for the whole operation
        cancel_event: Optional event that cancels the fetch when set

    Returns:
        Records in chunk order, then data-source order within a chunk

    Raises:
        ConfigurationError: If chunk_size (or another setting) is invalid
        ChunkFetchError: If any chunk fails (no partial results)
        FetchCancelledError: If cancelled or past the deadline
    """
    fetcher = ChunkedFetcher(
        field,
        chunk_size=chunk_size,
        max_concurrency=max_concurrency,
        timeout=timeout,
    )
    return await fetcher.fetch(filter_values, fetch_page, cancel_event=cancel_event)


async def fetch_in_chunks_result(
    filter_values: Iterable[Any],
    field: FieldAccessor | str,
    chunk_size: int,
    fetch_page: FetchPage,
    *,
    max_concurrency: int = 1,
    timeout: float | None = None,
    allow_partial: bool = False,
    cancel_event: asyncio.Event | None = None,
) -> ChunkResult:
    """Like fetch_in_chunks, returning the ChunkResult (opt into partial results here)."""
    fetcher = ChunkedFetcher(
        field,
        chunk_size=chunk_size,
        max_concurrency=max_concurrency,
        timeout=timeout,
        allow_partial=allow_partial,
    )
    return await fetcher.fetch_result(filter_values, fetch_page, cancel_event=cancel_event)


def fetch_in_chunks_sync(
    filter_values: Iterable[Any],
    field: FieldAccessor | str,
    chunk_size: int,
    fetch_page: FetchPage,
    *,
    max_concurrency: int = 1,
    timeout: float | None = None,
) -> list[Any]:
    """Blocking variant of fetch_in_chunks for code outside an event loop."""
    return asyncio.run(
        fetch_in_chunks(
            filter_values,
            field,
            chunk_size,
            fetch_page,
            max_concurrency=max_concurrency,
            timeout=timeout,
        )
    )
