"""In-memory data source."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core.exceptions import DataSourceError
from ..runtime.chunking import InPredicate


class InMemorySource:
    """Data source backed by a list of records.

    Useful for tests and for filtering already-loaded data with the same
    code path as a database. ``max_list_length`` rejects oversized predicates
    the way a database rejects an oversized IN list.
    """

    def __init__(
        self,
        records: Iterable[Any],
        *,
        max_list_length: int | None = None,
    ) -> None:
        self._records = list(records)
        self._max_list_length = max_list_length
        self.query_count = 0
        self.predicates: list[InPredicate] = []

    async def query(self, predicate: InPredicate) -> list[Any]:
        """Return matching records in stored order."""
        self.query_count += 1
        self.predicates.append(predicate)
        if self._max_list_length is not None and len(predicate) > self._max_list_length:
            raise DataSourceError(
                f"Predicate carries {len(predicate)} values; "
                f"maximum is {self._max_list_length}"
            )
        return [record for record in self._records if predicate(record)]

    async def __call__(self, predicate: InPredicate) -> list[Any]:
        return await self.query(predicate)

    def __len__(self) -> int:
        return len(self._records)
