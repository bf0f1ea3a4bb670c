from __future__ import annotations

from shareit.core.repositories.item_repository import ItemRepository
from shareit.core.use_cases.authorization import AuthorizationAsNotFound
from shareit.core.use_cases.dto import ItemDTO
from shareit.core.use_cases.errors import NotFoundError


class UpdateItemUseCase:
    """
    Partial update by the owner. Fields left as None keep their value.

    Toggling `available` off stops new bookings and pending approvals; bookings that
    are already APPROVED are left alone.
    """

    def __init__(self, *, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def execute(
            self,
            *,
            item_id: int,
            caller_id: int,
            name: str | None = None,
            description: str | None = None,
            available: bool | None = None,
    ) -> ItemDTO:
        item = self._item_repo.get(item_id)
        if item is None:
            raise NotFoundError("id", f"Item not found: {item_id}")

        AuthorizationAsNotFound.require_item_owner(item, caller_id)

        if name is not None:
            item.name = name
        if description is not None:
            item.description = description
        if available is not None:
            item.available = available

        return ItemDTO.from_entity(self._item_repo.update(item))
