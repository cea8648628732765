"""Data-source protocol for chunked fetches."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from ..runtime.chunking import InPredicate


@runtime_checkable
class DataSource(Protocol):
    """Protocol for data sources that answer bounded membership queries.

    Architecture:
        Protocol-based design allows any class implementing query() to be
        used as a data source (an ORM session wrapper, a REST client, an
        in-memory list) without a shared base class. A source's bound
        ``query`` method is a valid ``fetch_page``.
    """

    async def query(self, predicate: InPredicate) -> Sequence[Any]:
        """Return records whose field value is in ``predicate.values``.

        Args:
            predicate: Bounded membership predicate for one chunk

        Raises:
            Exception: If the query fails (the fetcher wraps it per chunk)
        """
        ...
