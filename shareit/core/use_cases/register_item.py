from __future__ import annotations

from shareit.core.entities.item import Item
from shareit.core.repositories.item_repository import ItemRepository
from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.dto import ItemDTO
from shareit.core.use_cases.errors import NotFoundError


class RegisterItemUseCase:
    """Lists an item on behalf of its owner."""

    def __init__(self, *, item_repo: ItemRepository, user_repo: UserRepository) -> None:
        self._item_repo = item_repo
        self._user_repo = user_repo

    def execute(self, *, owner_id: int, name: str, description: str, available: bool) -> ItemDTO:
        if self._user_repo.get(owner_id) is None:
            raise NotFoundError("ownerId", f"Owner not found: {owner_id}")

        item = self._item_repo.add(
            Item(name=name, description=description, available=available, owner_id=owner_id)
        )
        return ItemDTO.from_entity(item)
