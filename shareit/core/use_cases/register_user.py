from __future__ import annotations

from shareit.core.entities.user import User
from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.dto import UserDTO
from shareit.core.use_cases.errors import AlreadyExistsError


class RegisterUserUseCase:
    def __init__(self, *, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, *, name: str, email: str) -> UserDTO:
        if self._user_repo.email_exists(email):
            raise AlreadyExistsError("email", f"User with this email already exists: {email}")

        user = self._user_repo.add(User(name=name, email=email))
        return UserDTO.from_entity(user)
