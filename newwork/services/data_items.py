# newwork-server/newwork/services/data_items.py
import logging
from typing import List

from newwork.core import policy
from newwork.core.exceptions import InvalidInput, NotFound
from newwork.core.policy import Operation, Principal, Resource
from newwork.core.redaction import to_view
from newwork.db.models import DataItem, utcnow
from newwork.db.store import Database
from newwork.schemas import data_item as schemas
from newwork.services.base import authorize, fetch_authorized, require_scope

logger = logging.getLogger(__name__)


def _item_owner(item: DataItem) -> str:
    return item.owner_id


class DataItemService:
    """
    Shared data items. Deletion is soft: the record stays in the store with
    ``is_deleted`` set and can be restored through ``update``.
    """

    def __init__(self, db: Database):
        self.db = db

    def get(self, principal: Principal, item_id: str) -> schemas.DataItem:
        item, _ = fetch_authorized(principal, Operation.READ, Resource.DATA_ITEM, self.db.data_items, item_id, _item_owner)
        return to_view(item, schemas.DataItem)

    def list(self, principal: Principal) -> List[schemas.DataItem]:
        require_scope(principal, Operation.LIST, Resource.DATA_ITEM)
        items = self.db.data_items.filter(
            lambda i: policy.decide(principal, Operation.LIST, Resource.DATA_ITEM, i.owner_id).allowed
        )
        items.sort(key=lambda i: i.created_at)
        return [to_view(i, schemas.DataItem) for i in items]

    def create(self, principal: Principal, item_in: schemas.DataItemCreate) -> schemas.DataItem:
        owner_id = item_in.owner_id or principal.id
        authorize(principal, Operation.CREATE, Resource.DATA_ITEM, owner_id)
        if self.db.users.get(owner_id) is None:
            raise InvalidInput(f"Owner '{owner_id}' does not exist")

        item = self.db.data_items.add(
            DataItem(title=item_in.title, description=item_in.description, owner_id=owner_id)
        )
        logger.info("User %s created data item %s for %s", principal.id, item.id, owner_id)
        return to_view(item, schemas.DataItem)

    def update(self, principal: Principal, item_id: str, updates: schemas.DataItemUpdate) -> schemas.DataItem:
        fetch_authorized(principal, Operation.UPDATE, Resource.DATA_ITEM, self.db.data_items, item_id, _item_owner)
        changes = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}

        def apply(item: DataItem) -> None:
            for name, value in changes.items():
                setattr(item, name, value)
            item.updated_at = utcnow()

        return self._save(item_id, apply)

    def delete(self, principal: Principal, item_id: str) -> schemas.DataItem:
        fetch_authorized(principal, Operation.DELETE, Resource.DATA_ITEM, self.db.data_items, item_id, _item_owner)

        def mark_deleted(item: DataItem) -> None:
            item.is_deleted = True
            item.updated_at = utcnow()

        item = self._save(item_id, mark_deleted)
        logger.info("User %s deleted data item %s", principal.id, item_id)
        return item

    def _save(self, item_id: str, mutate) -> schemas.DataItem:
        item = self.db.data_items.update(item_id, mutate)
        if item is None:
            raise NotFound("DataItem not found")
        return to_view(item, schemas.DataItem)
