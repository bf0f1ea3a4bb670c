from __future__ import annotations

from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.errors import NotFoundError


class DeleteUserUseCase:
    def __init__(self, *, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, *, user_id: int) -> None:
        if not self._user_repo.delete(user_id):
            raise NotFoundError("id", f"User not found: {user_id}")
