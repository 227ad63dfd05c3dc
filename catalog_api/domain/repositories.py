"""
CRC: domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users, movies and categories (ports).
- Keep the application/identity layers independent from PostgreSQL or in-memory storage.

Collaborators
- domain.entities: User, Movie, Category
- domain.value_objects: MovieFilter, MovieSort, MovieDraft, MovieChanges
- infrastructure.repositories: postgres.*, in_memory.* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Uniqueness violations surface as crosscutting.exceptions.DuplicateKeyError.

Notes
- typing.Protocol for structural subtyping.
- Listing methods return (items, total) where total ignores offset/limit.
"""

from typing import List, Optional, Protocol, Tuple

from .entities import Category, Movie, User
from .value_objects import MovieChanges, MovieDraft, MovieFilter, MovieSort


class UserRepository(Protocol):
    """R: Credential Store port."""

    def get_user_by_id(self, user_id: int) -> Optional[User]: ...

    def get_user_by_email(self, email: str) -> Optional[User]: ...

    def exists_by_email(self, email: str) -> bool: ...

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        is_admin: bool = False,
    ) -> User: ...

    def update_name(self, user_id: int, name: str) -> Optional[User]: ...

    def set_admin(self, user_id: int, is_admin: bool) -> Optional[User]: ...

    def update_password(self, user_id: int, password_hash: str) -> Optional[User]: ...

    def list_users(self, *, offset: int, limit: int) -> Tuple[List[User], int]:
        """Ordered by created_at DESC."""
        ...


class MovieRepository(Protocol):
    """R: Catalog Query Engine backing store."""

    def search(
        self,
        movie_filter: MovieFilter,
        *,
        sort: MovieSort,
        offset: int,
        limit: int,
    ) -> Tuple[List[Movie], int]: ...

    def get_by_id(self, movie_id: int) -> Optional[Movie]: ...

    def exists_by_title(self, title: str, *, exclude_id: Optional[int] = None) -> bool: ...

    def create(self, draft: MovieDraft) -> Movie: ...

    def update(self, movie_id: int, changes: MovieChanges) -> Optional[Movie]: ...

    def delete(self, movie_id: int) -> bool:
        """
        Atomic cascade: movie_categories, user_favorites, movie row.
        Returns False when the movie does not exist.
        """
        ...

    def top_rated(self, *, limit: int) -> List[Movie]: ...

    def recently_added(self, *, limit: int) -> List[Movie]: ...

    def related(self, movie: Movie, *, limit: int) -> List[Movie]:
        """Movies sharing at least one category tag, excluding `movie`."""
        ...


class CategoryRepository(Protocol):
    def list_all(self) -> List[Category]:
        """Ordered by name ASC."""
        ...

    def get_by_id(self, category_id: int) -> Optional[Category]: ...

    def exists_by_name(self, name: str) -> bool: ...

    def create(self, name: str) -> Category: ...

    def is_in_use(self, category_id: int) -> bool: ...

    def delete(self, category_id: int) -> bool: ...
