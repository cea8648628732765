"""Data-source adapters."""

from .base import DataSource
from .http import HTTPSource
from .memory import InMemorySource

__all__ = [
    "DataSource",
    "HTTPSource",
    "InMemorySource",
]
