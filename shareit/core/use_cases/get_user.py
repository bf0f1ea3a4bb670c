from __future__ import annotations

from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.dto import UserDTO
from shareit.core.use_cases.errors import NotFoundError


class GetUserUseCase:
    def __init__(self, *, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, *, user_id: int) -> UserDTO:
        user = self._user_repo.get(user_id)
        if user is None:
            raise NotFoundError("id", f"User not found: {user_id}")
        return UserDTO.from_entity(user)
