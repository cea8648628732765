"""Chunk execution logic for fetching and aggregating chunks.

This module provides the ChunkExecutor class that executes chunk plans
against a caller-supplied fetch function and reassembles the pages in chunk
order.

Architecture:
    Dispatch is bounded by ``policy.max_concurrency``: with the default of 1
    chunks run strictly one after another; with more, up to that many fetches
    are in flight and finished pages are buffered by chunk index until all
    are in. A failed chunk aborts the run (all-or-nothing) unless the policy
    allows partial results. An ``asyncio.Event`` and the policy timeout stop
    dispatch and cancel in-flight fetches.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from time import perf_counter
from typing import Any

from ...core.exceptions import ChunkFetchError, DataSourceError, FetchCancelledError
from .definitions import (
    ChunkFailure,
    ChunkPlan,
    ChunkPolicy,
    ChunkResult,
    FieldAccessor,
    InPredicate,
    resolve_field_accessor,
)
from .telemetry import (
    log_chunk_cancelled,
    log_chunk_completed,
    log_chunk_error,
    log_chunk_execution_complete,
)

# Returns an iterable of records (or None), directly or as an awaitable
FetchPage = Callable[[InPredicate], Any]


def _is_async_callable(func: Any) -> bool:
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
        getattr(func, "__call__", None)
    )


class ChunkExecutor:
    """Executes chunk plans and aggregates results.

    The executor builds an InPredicate for each chunk plan, hands it to the
    fetch function, and concatenates the returned pages in chunk order.
    """

    def __init__(self, policy: ChunkPolicy, field: FieldAccessor | str) -> None:
        """Initialize chunk executor.

        Args:
            policy: Chunking policy (concurrency, deadline, partial mode)
            field: Accessor (or field name) selecting the filtered field
        """
        self._policy = policy
        self._field, self._field_name = resolve_field_accessor(field)

    async def execute(
        self,
        *,
        plans: list[ChunkPlan],
        fetch_page: FetchPage,
        cancel_event: asyncio.Event | None = None,
    ) -> ChunkResult:
        """Execute chunk plans and aggregate results.

        Args:
            plans: Chunk plans to execute, in order
            fetch_page: Function taking an InPredicate and returning the
                matching records; async functions are awaited, plain
                functions run in a worker thread
            cancel_event: Optional event that cancels the run when set

        Returns:
            ChunkResult with records in chunk order

        Raises:
            ChunkFetchError: If a chunk fails and partial results are not allowed
            FetchCancelledError: If cancelled or the policy timeout elapses
        """
        started = perf_counter()
        pages: dict[int, list[Any]] = {}
        failures: list[ChunkFailure] = []

        if plans:
            await self._dispatch(plans, fetch_page, cancel_event, pages, failures)

        records: list[Any] = []
        for chunk_index in sorted(pages):
            records.extend(pages[chunk_index])
        failures.sort(key=lambda failure: failure.chunk_index)

        result = ChunkResult(
            records=records,
            chunks_used=len(pages),
            total_chunks=len(plans),
            failures=failures,
            latency_ms=(perf_counter() - started) * 1000.0,
        )

        log_chunk_execution_complete(result=result)

        return result

    async def _dispatch(
        self,
        plans: list[ChunkPlan],
        fetch_page: FetchPage,
        cancel_event: asyncio.Event | None,
        pages: dict[int, list[Any]],
        failures: list[ChunkFailure],
    ) -> None:
        pending: dict[asyncio.Task[list[Any]], ChunkPlan] = {}
        dispatched = 0
        cancel_waiter = (
            asyncio.ensure_future(cancel_event.wait()) if cancel_event is not None else None
        )

        try:
            async with asyncio.timeout(self._policy.timeout):
                while True:
                    # A cancel that lands after the last page is in does not discard it
                    remaining = bool(pending) or dispatched < len(plans)
                    if cancel_event is not None and cancel_event.is_set() and remaining:
                        raise self._cancelled("cancelled", len(pages))

                    while dispatched < len(plans) and len(pending) < self._policy.max_concurrency:
                        plan = plans[dispatched]
                        dispatched += 1
                        task = asyncio.create_task(self._fetch_chunk(plan, fetch_page))
                        pending[task] = plan

                    if not pending:
                        break

                    waiters: set[asyncio.Future[Any]] = set(pending)
                    if cancel_waiter is not None:
                        waiters.add(cancel_waiter)
                    done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)

                    for task in done:
                        if task is cancel_waiter:
                            continue
                        plan = pending.pop(task)
                        if task.cancelled():
                            raise self._cancelled("cancelled", len(pages))
                        error = task.exception()
                        if error is None:
                            pages[plan.chunk_index] = task.result()
                            continue
                        if not isinstance(error, Exception):
                            raise error

                        log_chunk_error(
                            chunk_index=plan.chunk_index,
                            error_type=type(error).__name__,
                            error_message=str(error),
                        )
                        if self._policy.allow_partial:
                            failures.append(
                                ChunkFailure(
                                    chunk_index=plan.chunk_index,
                                    values=plan.values,
                                    error=error,
                                )
                            )
                            continue
                        raise ChunkFetchError(
                            f"Chunk {plan.chunk_index + 1} of {plan.total_chunks} "
                            f"({plan.size} values) failed: {error}",
                            chunk_index=plan.chunk_index,
                            values=plan.values,
                            total_chunks=plan.total_chunks,
                            cause=error,
                        ) from error
        except TimeoutError as e:
            raise self._cancelled("timeout", len(pages)) from e
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    async def _fetch_chunk(self, plan: ChunkPlan, fetch_page: FetchPage) -> list[Any]:
        predicate = InPredicate(
            values=plan.values,
            field=self._field,
            field_name=self._field_name,
            chunk_index=plan.chunk_index,
        )

        chunk_start = perf_counter()
        try:
            if _is_async_callable(fetch_page):
                page = await fetch_page(predicate)
            else:
                page = await asyncio.to_thread(fetch_page, predicate)
                # Plain wrappers around async sources hand back a coroutine
                if inspect.isawaitable(page):
                    page = await page
        except asyncio.CancelledError as e:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            # Raised by the data source itself, not by our teardown or deadline
            raise DataSourceError(
                f"Fetch for chunk {plan.chunk_index + 1} of {plan.total_chunks} was cancelled "
                "by the data source"
            ) from e
        records = [] if page is None else list(page)

        log_chunk_completed(
            chunk_index=plan.chunk_index,
            rows=len(records),
            latency_ms=(perf_counter() - chunk_start) * 1000.0,
        )
        return records

    def _cancelled(self, reason: str, chunks_completed: int) -> FetchCancelledError:
        log_chunk_cancelled(reason=reason, chunks_completed=chunks_completed)
        message = (
            "Chunked fetch timed out" if reason == "timeout" else "Chunked fetch was cancelled"
        )
        return FetchCancelledError(
            f"{message} after {chunks_completed} chunk(s)",
            reason=reason,
            chunks_completed=chunks_completed,
        )
