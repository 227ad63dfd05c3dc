"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .catalog import (
    InMemoryCatalogStore,
    InMemoryCategoryRepository,
    InMemoryMovieRepository,
)
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCatalogStore",
    "InMemoryCategoryRepository",
    "InMemoryMovieRepository",
    "InMemoryUserRepository",
]
