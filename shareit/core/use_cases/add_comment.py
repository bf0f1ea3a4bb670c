from __future__ import annotations

from shareit.core.clock import Clock, utc_now
from shareit.core.entities.comment import Comment
from shareit.core.repositories.booking_repository import BookingRepository
from shareit.core.repositories.comment_repository import CommentRepository
from shareit.core.repositories.item_repository import ItemRepository
from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.dto import CommentDTO
from shareit.core.use_cases.errors import BadRequestError, NotFoundError


class AddCommentUseCase:
    """
    Only a user with an APPROVED booking of the item that has already started, past or
    current, may comment on it.
    """

    def __init__(
            self,
            *,
            booking_repo: BookingRepository,
            comment_repo: CommentRepository,
            item_repo: ItemRepository,
            user_repo: UserRepository,
            clock: Clock = utc_now,
    ) -> None:
        self._booking_repo = booking_repo
        self._comment_repo = comment_repo
        self._item_repo = item_repo
        self._user_repo = user_repo
        self._clock = clock

    def execute(self, *, author_id: int, item_id: int, text: str) -> CommentDTO:
        now = self._clock()

        if self._booking_repo.count_started_approved_for_booker(item_id, author_id, now) == 0:
            raise BadRequestError(
                "comment",
                f"Item was not booked by the author: itemId {item_id}, authorId {author_id}",
            )

        if self._user_repo.get(author_id) is None:
            raise NotFoundError("authorId", f"Author not found: {author_id}")

        if self._item_repo.get(item_id) is None:
            raise NotFoundError("itemId", f"Item not found: {item_id}")

        comment = self._comment_repo.add(Comment(text=text, item_id=item_id, author_id=author_id, created=now))
        return CommentDTO.from_entity(comment)
