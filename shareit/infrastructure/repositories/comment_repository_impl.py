from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from shareit.core.entities.comment import Comment
from shareit.core.repositories.comment_repository import CommentRepository
from shareit.infrastructure.models.models import CommentModel, UserModel


class CommentRepositoryImpl(CommentRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def add(self, comment: Comment) -> Comment:
        row = CommentModel(
            text=comment.text,
            item_id=comment.item_id,
            author_id=comment.author_id,
            created=comment.created,
        )
        self._db.add(row)
        self._db.flush()

        author_name = self._db.execute(select(UserModel.name).where(UserModel.id == row.author_id)).scalar_one()
        return self._to_entity(row, author_name)

    def find_by_item(self, item_id: int) -> list[Comment]:
        stmt = (
            select(CommentModel, UserModel.name)
            .join(UserModel, CommentModel.author_id == UserModel.id)
            .where(CommentModel.item_id == item_id)
            .order_by(CommentModel.created.desc(), CommentModel.id.desc())
        )
        return [self._to_entity(row, author_name) for row, author_name in self._db.execute(stmt).all()]

    @staticmethod
    def _to_entity(row: CommentModel, author_name: str) -> Comment:
        return Comment(
            comment_id=row.id,
            text=row.text,
            item_id=row.item_id,
            author_id=row.author_id,
            created=row.created,
            author_name=author_name,
        )
