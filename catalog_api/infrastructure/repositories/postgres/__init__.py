"""
PostgreSQL Repository Implementations (psycopg 3, SQL parametrizado).
"""

from .category import PostgresCategoryRepository
from .movie import PostgresMovieRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresCategoryRepository",
    "PostgresMovieRepository",
    "PostgresUserRepository",
]
