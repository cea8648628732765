"""Chunking metadata definitions and policy structures.

This module defines the data structures used to describe a chunked fetch:
the policy that bounds it, the per-chunk plans, the predicate handed to the
data source, and the aggregated result.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...core.enums import DEFAULT_CHUNK_SIZE
from ...core.exceptions import ConfigurationError

FieldAccessor = Callable[[Any], Any]


class ChunkPolicy(BaseModel):
    """Chunking policy for a fetch.

    Attributes:
        chunk_size: Maximum number of filter values per query
        max_concurrency: Maximum number of chunk fetches in flight (1 = sequential)
        timeout: Deadline in seconds for the whole operation (None = no deadline)
        allow_partial: Keep going past failing chunks and report them on the result
    """

    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, ge=1, strict=True)
    max_concurrency: int = Field(1, ge=1, strict=True)
    timeout: float | None = Field(None, gt=0)
    allow_partial: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


def resolve_chunk_policy(policy: ChunkPolicy | None = None, **overrides: Any) -> ChunkPolicy:
    """Build a validated ChunkPolicy.

    Args:
        policy: Optional base policy
        **overrides: Policy fields that replace the base values

    Returns:
        Validated ChunkPolicy

    Raises:
        ConfigurationError: If any setting is invalid
    """
    if policy is not None and not overrides:
        return policy
    settings = policy.model_dump() if policy is not None else {}
    settings.update(overrides)
    try:
        return ChunkPolicy(**settings)
    except ValidationError as e:
        first = e.errors()[0]
        name = str(first["loc"][0]) if first.get("loc") else None
        value = settings.get(name) if name else None
        raise ConfigurationError(
            f"Invalid {name or 'policy'}={value!r}: {first['msg']}", field=name
        ) from e


def resolve_field_accessor(accessor: FieldAccessor | str) -> tuple[FieldAccessor, str | None]:
    """Turn a field accessor or field name into a callable.

    A string names an attribute (or mapping key); dots walk nested fields,
    e.g. ``"customer.id"``.

    Returns:
        Tuple of (accessor callable, field name or None)
    """
    if isinstance(accessor, str):
        if not accessor:
            raise ConfigurationError("field name must not be empty", field="field")
        parts = accessor.split(".")

        def _get(record: Any) -> Any:
            value = record
            for part in parts:
                if isinstance(value, Mapping):
                    value = value[part]
                else:
                    value = getattr(value, part)
            return value

        return _get, accessor
    if not callable(accessor):
        raise ConfigurationError(
            f"field must be a callable or a field name, got {type(accessor).__name__}",
            field="field",
        )
    return accessor, None


@dataclass(frozen=True)
class ChunkPlan:
    """Plan for a single chunk.

    Attributes:
        chunk_index: Zero-based index of this chunk in the overall plan
        values: Filter values carried by this chunk, in input order
        total_chunks: Number of chunks in the overall plan
    """

    chunk_index: int
    values: tuple[Any, ...]
    total_chunks: int

    @property
    def size(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class InPredicate:
    """Predicate matching records whose field is in a bounded set of values.

    Handed to the fetch function once per chunk. Query builders read
    ``values`` (and ``field_name`` when the field was given by name);
    in-memory sources can call the predicate on a record directly.
    """

    values: tuple[Any, ...]
    field: FieldAccessor
    field_name: str | None = None
    chunk_index: int = 0
    _lookup: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            lookup: Any = frozenset(self.values)
        except TypeError:
            # Unhashable filter values fall back to a linear scan
            lookup = self.values
        object.__setattr__(self, "_lookup", lookup)

    def __call__(self, record: Any) -> bool:
        return self.field(record) in self._lookup

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


@dataclass(frozen=True)
class ChunkFailure:
    """A chunk that failed while running in partial-results mode."""

    chunk_index: int
    values: tuple[Any, ...]
    error: BaseException


@dataclass
class ChunkResult:
    """Result of chunked execution.

    Attributes:
        records: Aggregated records, in chunk order then data-source order
        chunks_used: Number of chunks fetched successfully
        total_chunks: Number of chunks planned
        failures: Failed chunks (only populated in partial-results mode)
        latency_ms: Wall-clock time of the whole execution
    """

    records: list[Any]
    chunks_used: int
    total_chunks: int
    failures: list[ChunkFailure] = field(default_factory=list)
    latency_ms: float | None = None

    @property
    def total_records(self) -> int:
        return len(self.records)

    @property
    def complete(self) -> bool:
        """True when every planned chunk was fetched."""
        return not self.failures and self.chunks_used == self.total_chunks
