"""
Intent registry mapping each intent tag to the handler that executes it.
"""
from __future__ import annotations

from typing import Callable, Dict

from .intents import DispatchOutcome, IntentTag

HandlerFunc = Callable[[IntentTag, Dict[str, str], object], DispatchOutcome]


class IntentRegistry:
    def __init__(self) -> None:
        self._handlers: Dict[IntentTag, HandlerFunc] = {}

    def register(self, intent: IntentTag, handler: HandlerFunc) -> None:
        self._handlers[IntentTag(intent)] = handler

    def dispatch(self, intent: IntentTag, params: Dict[str, str], context: object) -> DispatchOutcome:
        if intent not in self._handlers:
            raise ValueError(f"No handler registered for intent '{intent}'")
        return self._handlers[intent](intent, dict(params or {}), context)
