from __future__ import annotations

from abc import ABC, abstractmethod

from shareit.core.entities.item import Item
from shareit.core.pagination import OffsetPager


class ItemRepository(ABC):
    """
    Repository interface for items. The booking core only reads items; writes belong
    to item registration.
    """

    @abstractmethod
    def get(self, item_id: int) -> Item | None:
        """Return a single item by id, or None if missing."""
        raise NotImplementedError

    @abstractmethod
    def add(self, item: Item) -> Item:
        raise NotImplementedError

    @abstractmethod
    def update(self, item: Item) -> Item:
        raise NotImplementedError

    @abstractmethod
    def find_by_owner(self, owner_id: int, pager: OffsetPager) -> list[Item]:
        raise NotImplementedError

    @abstractmethod
    def search(self, text: str, pager: OffsetPager) -> list[Item]:
        """
        Available items whose name or description contains `text`, ignoring case.
        """
        raise NotImplementedError
