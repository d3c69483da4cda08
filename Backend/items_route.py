"""
Direct todo endpoints backing the main interface (explicit complete/delete buttons).
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from dependencies import get_store, get_user_id
from schemas import TodoCreate
from services.task_store import InMemoryTaskStore

logger = logging.getLogger("items_route")
router = APIRouter(prefix="/items", tags=["items"])


@router.get("")
def list_items(user_id: str = Depends(get_user_id), store: InMemoryTaskStore = Depends(get_store)):
    return [record.to_dict() for record in store.list_by_status(user_id)]


@router.post("", status_code=201)
def create_item(
    payload: TodoCreate,
    user_id: str = Depends(get_user_id),
    store: InMemoryTaskStore = Depends(get_store),
):
    task = (payload.task or "").strip()
    if not task:
        raise HTTPException(status_code=400, detail="Task is required")
    record_id = store.insert(user_id, task)
    return {"message": "Todo created successfully", "id": record_id}


@router.put("/{item_id}/complete")
def complete_item(
    item_id: int,
    user_id: str = Depends(get_user_id),
    store: InMemoryTaskStore = Depends(get_store),
):
    if not store.update_status_to_completed(item_id, user_id):
        raise HTTPException(status_code=404, detail="Todo not found or not yours")
    return {"message": "Todo marked as completed"}


@router.delete("/{item_id}")
def delete_item(
    item_id: int,
    user_id: str = Depends(get_user_id),
    store: InMemoryTaskStore = Depends(get_store),
):
    if not store.delete(item_id, user_id):
        raise HTTPException(status_code=404, detail="Todo not found or not yours")
    logger.info(f"User {user_id} deleted todo {item_id}")
    return {"message": "Todo deleted successfully"}
