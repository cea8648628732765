"""Runtime orchestration components."""

from .chunking import ChunkExecutor, ChunkPlanner

__all__ = [
    "ChunkPlanner",
    "ChunkExecutor",
]
