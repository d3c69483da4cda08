"""Intent handlers and the default registry wiring."""
from __future__ import annotations

from ..intent_registry import IntentRegistry
from ..intents import IntentTag
from . import capabilities, general_chat, todos
from .base import HandlerContext

DEFAULT_HANDLERS = {
    IntentTag.ADD_TODO: todos.handle_add,
    IntentTag.ASK_FOR_TASK: todos.handle_ask_for_task,
    IntentTag.LIST_PENDING: todos.handle_list,
    IntentTag.LIST_ALL: todos.handle_list,
    IntentTag.COMPLETE_TODO: todos.handle_complete,
    IntentTag.DELETE_TODO: todos.handle_delete,
    IntentTag.HELP: capabilities.handle,
    IntentTag.CHAT: general_chat.handle,
}


def build_registry() -> IntentRegistry:
    registry = IntentRegistry()
    for intent, handler in DEFAULT_HANDLERS.items():
        registry.register(intent, handler)
    return registry


__all__ = ["HandlerContext", "DEFAULT_HANDLERS", "build_registry"]
