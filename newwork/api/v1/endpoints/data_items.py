# newwork-server/newwork/api/v1/endpoints/data_items.py
from typing import List

from fastapi import APIRouter, Depends, status

from newwork.core import security
from newwork.core.policy import Principal
from newwork.db import session
from newwork.db.store import Database
from newwork.schemas import data_item as data_item_schema
from newwork.services.data_items import DataItemService

router = APIRouter()

@router.get("", response_model=List[data_item_schema.DataItem])
def list_data_items(
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    return DataItemService(db).list(principal)

@router.post("", response_model=data_item_schema.DataItem, status_code=status.HTTP_201_CREATED)
def create_data_item(
    item_in: data_item_schema.DataItemCreate,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Creates an item owned by the caller, or by anyone if the caller is a manager. """
    return DataItemService(db).create(principal, item_in)

@router.get("/{item_id}", response_model=data_item_schema.DataItem)
def read_data_item(
    item_id: str,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    return DataItemService(db).get(principal, item_id)

@router.put("/{item_id}", response_model=data_item_schema.DataItem)
def update_data_item(
    item_id: str,
    updates: data_item_schema.DataItemUpdate,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Partial update. Sending is_deleted=false restores a deleted item. """
    return DataItemService(db).update(principal, item_id, updates)

@router.delete("/{item_id}", response_model=data_item_schema.DataItem)
def delete_data_item(
    item_id: str,
    db: Database = Depends(session.get_db),
    principal: Principal = Depends(security.get_current_principal)
):
    """ Soft delete: the item is flagged, never removed. """
    return DataItemService(db).delete(principal, item_id)
