"""Unit tests for chunk planning logic."""

from __future__ import annotations

import math

import pytest

from chunkfetch.runtime.chunking import ChunkPlanner, ChunkPolicy, partition


class TestPartition:
    """Test the partition generator."""

    def test_partition_exact_multiple(self):
        """Test values that divide evenly into chunks."""
        assert list(partition(range(6), 3)) == [[0, 1, 2], [3, 4, 5]]

    def test_partition_last_chunk_smaller(self):
        """Test the last chunk holds the remainder."""
        assert list(partition([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]

    def test_partition_empty(self):
        """Test empty input yields no chunks."""
        assert list(partition([], 10)) == []

    def test_partition_consumes_generator(self):
        """Test one-shot iterables are partitioned."""
        values = (v for v in "abcde")
        assert list(partition(values, 4)) == [["a", "b", "c", "d"], ["e"]]


class TestChunkPlanner:
    """Test ChunkPlanner functionality."""

    def test_plan_multiple_chunks(self):
        """Test planning 2500 values with a chunk size of 1000."""
        planner = ChunkPlanner(policy=ChunkPolicy(chunk_size=1000))

        plans = planner.plan(range(1, 2501))

        assert len(plans) == 3
        assert [plan.size for plan in plans] == [1000, 1000, 500]
        assert [plan.chunk_index for plan in plans] == [0, 1, 2]
        assert all(plan.total_chunks == 3 for plan in plans)
        assert plans[0].values[0] == 1
        assert plans[2].values[-1] == 2500

    def test_plan_single_chunk_under_limit(self):
        """Test planning when all values fit in one chunk."""
        planner = ChunkPlanner(policy=ChunkPolicy(chunk_size=1000))

        plans = planner.plan([10, 20, 30])

        assert len(plans) == 1
        assert plans[0].values == (10, 20, 30)
        assert plans[0].chunk_index == 0

    def test_plan_empty_values(self):
        """Test planning an empty value set."""
        planner = ChunkPlanner(policy=ChunkPolicy(chunk_size=5))

        assert planner.plan([]) == []

    @pytest.mark.parametrize(
        ("count", "chunk_size"),
        [(1, 1), (7, 1), (7, 3), (9, 3), (10, 100), (1001, 1000)],
    )
    def test_plan_is_ordered_cover(self, count: int, chunk_size: int):
        """Test chunks cover the input exactly once, in order, within bounds."""
        values = [f"id-{i}" for i in range(count)]
        planner = ChunkPlanner(policy=ChunkPolicy(chunk_size=chunk_size))

        plans = planner.plan(values)

        assert len(plans) == math.ceil(count / chunk_size)
        assert all(1 <= plan.size <= chunk_size for plan in plans)
        flattened = [value for plan in plans for value in plan.values]
        assert flattened == values

    def test_plan_keeps_duplicate_values(self):
        """Test duplicates in the input are neither merged nor dropped."""
        planner = ChunkPlanner(policy=ChunkPolicy(chunk_size=2))

        plans = planner.plan([1, 1, 2])

        assert [plan.values for plan in plans] == [(1, 1), (2,)]

    def test_plan_logs_creation(self, caplog: pytest.LogCaptureFixture):
        """Test plan creation emits a structured log record."""
        planner = ChunkPlanner(policy=ChunkPolicy(chunk_size=2))

        with caplog.at_level("INFO", logger="chunkfetch.runtime.chunking.telemetry"):
            planner.plan([1, 2, 3])

        record = next(r for r in caplog.records if r.getMessage() == "chunk_plan_created")
        assert record.total_values == 3
        assert record.total_chunks == 2
        assert record.chunk_size == 2
