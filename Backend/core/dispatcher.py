"""
Action dispatcher: turns one inbound message into one DispatchOutcome.

Per-user dialogue has two states. With no pending slot the message is
classified and routed to its handler; an ``add_todo`` without task text opens
an ``awaiting_task`` slot and asks for it. With a pending slot the whole next
message is taken as the task text, unless it is blank or another bare "add a
todo", which leave the question open. The slot is read, decided on and written
under one per-user lock, and before any handler runs, so no slot is ever held
across a gateway call.
"""
from __future__ import annotations

import logging
from typing import Optional

from services.completion_gateway import RemoteCompletionGateway
from services.task_store import TaskStore

from . import composer
from .classifier import classify
from .dialogue_state import DialogueStateStore, SlotType
from .handlers import HandlerContext, build_registry
from .intent_registry import IntentRegistry
from .intents import DispatchOutcome, IntentTag, RecognitionResult

logger = logging.getLogger("dispatcher")


class ActionDispatcher:
    def __init__(
        self,
        store: TaskStore,
        gateway: RemoteCompletionGateway,
        state: Optional[DialogueStateStore] = None,
        registry: Optional[IntentRegistry] = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.state = state if state is not None else DialogueStateStore()
        self.registry = registry or build_registry()

    def recognize(self, user_id: str, text: str) -> RecognitionResult:
        """Resolve the intent for ``text``, consuming or opening the user's slot."""
        user_id = str(user_id)
        text = (text or "").strip()

        with self.state.user_lock(user_id):
            slot = self.state.take(user_id)
            result = classify(text)
            asks_for_task = result.intent == IntentTag.ADD_TODO and not result.params.get("task")

            if slot is not None and slot.slot_type == SlotType.AWAITING_TASK:
                # A blank answer or a repeated "add a todo" keeps the question open.
                if not text or asks_for_task:
                    self.state.set(user_id, SlotType.AWAITING_TASK)
                    return RecognitionResult(intent=IntentTag.ASK_FOR_TASK)
                return RecognitionResult(intent=IntentTag.ADD_TODO, params={"task": text})

            if asks_for_task:
                self.state.set(user_id, SlotType.AWAITING_TASK)
                return RecognitionResult(intent=IntentTag.ASK_FOR_TASK)
            return result

    def dispatch(self, user_id: str, message: str) -> DispatchOutcome:
        user_id = str(user_id)
        try:
            recognition = self.recognize(user_id, message)
        except Exception:
            logger.exception(f"Recognition failed for user {user_id}")
            return DispatchOutcome(intent=IntentTag.CHAT, reply=composer.GENERIC_FALLBACK)

        logger.info(f"User {user_id} | Intent: {recognition.intent.value} | Params: {recognition.params}")
        context = HandlerContext(
            user_id=user_id,
            message=(message or "").strip(),
            store=self.store,
            gateway=self.gateway,
        )
        try:
            return self.registry.dispatch(recognition.intent, recognition.params, context)
        except Exception:
            logger.exception(f"Handler for {recognition.intent.value} failed")
            return DispatchOutcome(
                intent=recognition.intent,
                params=dict(recognition.params),
                reply=composer.GENERIC_FALLBACK,
            )
