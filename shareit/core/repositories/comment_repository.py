from __future__ import annotations

from abc import ABC, abstractmethod

from shareit.core.entities.comment import Comment


class CommentRepository(ABC):
    @abstractmethod
    def add(self, comment: Comment) -> Comment:
        """Persist a new comment and return it with its identity and author name."""
        raise NotImplementedError

    @abstractmethod
    def find_by_item(self, item_id: int) -> list[Comment]:
        """Comments on the item, newest first."""
        raise NotImplementedError
