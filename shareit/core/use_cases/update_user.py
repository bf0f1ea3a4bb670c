from __future__ import annotations

from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.dto import UserDTO
from shareit.core.use_cases.errors import AlreadyExistsError, NotFoundError


class UpdateUserUseCase:
    """Partial update. Fields left as None keep their value."""

    def __init__(self, *, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, *, user_id: int, name: str | None = None, email: str | None = None) -> UserDTO:
        user = self._user_repo.get(user_id)
        if user is None:
            raise NotFoundError("id", f"User not found: {user_id}")

        if email is not None and email != user.email:
            if self._user_repo.email_exists(email):
                raise AlreadyExistsError("email", f"User with this email already exists: {email}")
            user.email = email
        if name is not None:
            user.name = name

        return UserDTO.from_entity(self._user_repo.update(user))
