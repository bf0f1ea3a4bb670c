from __future__ import annotations

from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.dto import UserDTO


class ListUsersUseCase:
    def __init__(self, *, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self) -> list[UserDTO]:
        return [UserDTO.from_entity(u) for u in self._user_repo.find_all()]
