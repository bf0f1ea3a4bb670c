from __future__ import annotations

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from shareit.core.entities.item import Item
from shareit.core.pagination import OffsetPager
from shareit.core.repositories.item_repository import ItemRepository
from shareit.infrastructure.models.models import ItemModel

_SORTABLE_COLUMNS = {
    "id": ItemModel.id,
    "name": ItemModel.name,
}


class ItemRepositoryImpl(ItemRepository):
    """SQLAlchemy implementation for items. Flushes only; the caller commits."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, item_id: int) -> Item | None:
        row = self._db.get(ItemModel, item_id)
        if row is None:
            return None
        return self._to_entity(row)

    def add(self, item: Item) -> Item:
        row = ItemModel(
            name=item.name,
            description=item.description,
            available=item.available,
            owner_id=item.owner_id,
        )
        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def update(self, item: Item) -> Item:
        row = self._db.get(ItemModel, item.item_id)
        if row is None:
            raise ValueError(f"Cannot update missing item: {item.item_id}")

        row.name = item.name
        row.description = item.description
        row.available = item.available

        self._db.add(row)
        self._db.flush()
        return self._to_entity(row)

    def find_by_owner(self, owner_id: int, pager: OffsetPager) -> list[Item]:
        return self._page(select(ItemModel).where(ItemModel.owner_id == owner_id), pager)

    def search(self, text: str, pager: OffsetPager) -> list[Item]:
        # Match % and _ literally.
        escaped = text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        stmt = (
            select(ItemModel)
            .where(ItemModel.available.is_(True))
            .where(
                or_(
                    func.lower(ItemModel.name).like(pattern, escape="\\"),
                    func.lower(ItemModel.description).like(pattern, escape="\\"),
                )
            )
        )
        return self._page(stmt, pager)

    def _page(self, stmt: Select, pager: OffsetPager) -> list[Item]:
        for order in pager.sort:
            column = _SORTABLE_COLUMNS.get(order.property)
            if column is None:
                raise ValueError(f"Unsupported sort property: {order.property!r}")
            stmt = stmt.order_by(column.desc() if order.is_descending else column.asc())
        stmt = stmt.order_by(ItemModel.id.asc())

        skip, limit = pager.window()
        stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        return [self._to_entity(row) for row in self._db.execute(stmt).scalars().all()]

    @staticmethod
    def _to_entity(row: ItemModel) -> Item:
        return Item(
            item_id=row.id,
            name=row.name,
            description=row.description,
            available=row.available,
            owner_id=row.owner_id,
        )
