"""
===============================================================================
USE CASES: Profile (self-service)
===============================================================================

- GetUserUseCase: perfil por id (propio o admin) o NOT_FOUND.
- UpdateProfileUseCase: cambia el nombre visible (requerido, trim).

Collaborators:
    - UserRepository.get_user_by_id / update_name
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.auth_service import MAX_NAME_LENGTH
from .user_results import UserError, UserErrorCode, UserResult, user_not_found


class GetUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: int) -> UserResult:
        user = self._users.get_user_by_id(user_id)
        if user is None:
            return UserResult(error=user_not_found())
        return UserResult(user=user)


class UpdateProfileUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: int, name: str) -> UserResult:
        normalized = (name or "").strip()
        if not normalized:
            return self._validation_error("Name is required")
        if len(normalized) > MAX_NAME_LENGTH:
            return self._validation_error(
                f"Name must be at most {MAX_NAME_LENGTH} characters"
            )

        user = self._users.update_name(user_id, normalized)
        if user is None:
            return UserResult(error=user_not_found())

        logger.info("profile updated", extra={"user_id": user_id})
        return UserResult(user=user)

    @staticmethod
    def _validation_error(message: str) -> UserResult:
        return UserResult(
            error=UserError(code=UserErrorCode.VALIDATION_ERROR, message=message)
        )
