"""Unit tests for InMemorySource."""

from __future__ import annotations

import pytest

from chunkfetch.core import DataSourceError
from chunkfetch.runtime.chunking import InPredicate, resolve_field_accessor
from chunkfetch.sources import DataSource, InMemorySource


def predicate_for(values: tuple, field: str = "id") -> InPredicate:
    accessor, name = resolve_field_accessor(field)
    return InPredicate(values=values, field=accessor, field_name=name)


@pytest.mark.asyncio
async def test_in_memory_source_filters_in_stored_order():
    """Test records matching the predicate come back in stored order."""
    source = InMemorySource([{"id": 3}, {"id": 1}, {"id": 2}, {"id": 1}])

    records = await source.query(predicate_for((1, 3)))

    assert records == [{"id": 3}, {"id": 1}, {"id": 1}]
    assert source.query_count == 1
    assert len(source) == 4


@pytest.mark.asyncio
async def test_in_memory_source_enforces_list_limit():
    """Test oversized predicates are rejected like a database would."""
    source = InMemorySource([{"id": 1}], max_list_length=2)

    with pytest.raises(DataSourceError, match="maximum is 2"):
        await source.query(predicate_for((1, 2, 3)))

    assert source.query_count == 1


@pytest.mark.asyncio
async def test_in_memory_source_is_callable():
    """Test the source itself can be used as the fetch function."""
    source = InMemorySource([{"id": 1}, {"id": 2}])

    assert await source(predicate_for((2,))) == [{"id": 2}]


def test_in_memory_source_satisfies_protocol():
    """Test InMemorySource implements the DataSource protocol."""
    assert isinstance(InMemorySource([]), DataSource)
