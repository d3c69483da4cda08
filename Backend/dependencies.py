from __future__ import annotations

from typing import Optional

from fastapi import Header, Request

from core.dispatcher import ActionDispatcher
from services.completion_gateway import RemoteCompletionGateway
from services.task_store import InMemoryTaskStore

GUEST_USER = "guest"


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Identify the caller; session issuance lives outside this service."""
    return (x_user_id or "").strip() or GUEST_USER


def get_dispatcher(request: Request) -> ActionDispatcher:
    return request.app.state.dispatcher


def get_store(request: Request) -> InMemoryTaskStore:
    return request.app.state.store


def get_gateway(request: Request) -> RemoteCompletionGateway:
    return request.app.state.gateway
