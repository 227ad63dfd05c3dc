"""
USE CASE: List Users (admin)

Paginado con el mismo default canónico que el catálogo; orden created_at DESC.
"""

from __future__ import annotations

from typing import Optional

from ....crosscutting.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PageRequest,
    total_pages,
)
from ....domain.repositories import UserRepository
from .user_results import UserPageResult


class ListUsersUseCase:
    def __init__(
        self,
        repository: UserRepository,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._users = repository
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    def execute(
        self, page: Optional[int] = None, page_size: Optional[int] = None
    ) -> UserPageResult:
        page_request = PageRequest.normalize(
            page,
            page_size,
            default_size=self._default_page_size,
            max_size=self._max_page_size,
        )
        users, total = self._users.list_users(
            offset=page_request.offset, limit=page_request.limit
        )
        return UserPageResult(
            users=users,
            total=total,
            page=page_request.page,
            page_size=page_request.page_size,
            total_pages=total_pages(total, page_request.page_size),
        )
