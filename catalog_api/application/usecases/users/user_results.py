"""
USER USE CASE RESULTS

UserErrorCode + UserError + UserResult / UserPageResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import User


class UserErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str


@dataclass
class UserResult:
    user: User | None = None
    error: UserError | None = None


@dataclass
class UserPageResult:
    users: List[User] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0
    error: UserError | None = None


def user_not_found() -> UserError:
    return UserError(code=UserErrorCode.NOT_FOUND, message="User not found")
