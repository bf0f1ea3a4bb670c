from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from shareit.core.entities.user import User
from shareit.core.repositories.user_repository import UserRepository
from shareit.infrastructure.models.models import UserModel


class UserRepositoryImpl(UserRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, user_id: int) -> User | None:
        row = self._db.get(UserModel, user_id)
        if row is None:
            return None
        return self._to_entity(row)

    def add(self, user: User) -> User:
        row = UserModel(name=user.name, email=user.email)
        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def update(self, user: User) -> User:
        row = self._db.get(UserModel, user.user_id)
        if row is None:
            raise ValueError(f"Cannot update missing user: {user.user_id}")

        row.name = user.name
        row.email = user.email

        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def delete(self, user_id: int) -> bool:
        row = self._db.get(UserModel, user_id)
        if row is None:
            return False

        self._db.delete(row)
        self._db.flush()
        return True

    def find_all(self) -> list[User]:
        rows = self._db.execute(select(UserModel).order_by(UserModel.id.asc())).scalars().all()
        return [self._to_entity(row) for row in rows]

    def email_exists(self, email: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == email).limit(1)
        return self._db.execute(stmt).first() is not None

    @staticmethod
    def _to_entity(row: UserModel) -> User:
        return User(user_id=row.id, name=row.name, email=row.email)
