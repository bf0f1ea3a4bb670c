from __future__ import annotations

from abc import ABC, abstractmethod

from shareit.core.entities.user import User


class UserRepository(ABC):
    @abstractmethod
    def get(self, user_id: int) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> User:
        """Persist a new user and return it with its identity assigned."""
        raise NotImplementedError

    @abstractmethod
    def update(self, user: User) -> User:
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: int) -> bool:
        """Remove the user. False when there was no such user."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[User]:
        """Every user, in id order."""
        raise NotImplementedError

    @abstractmethod
    def email_exists(self, email: str) -> bool:
        raise NotImplementedError
