from __future__ import annotations

import logging
from typing import Dict

from services.task_store import TaskStatus

from .. import composer
from ..intents import DispatchOutcome, IntentTag
from .base import HandlerContext, param

logger = logging.getLogger("handlers.todos")


def handle_add(intent: IntentTag, params: Dict[str, str], context: HandlerContext) -> DispatchOutcome:
    task = param(params, "task")
    if task is None:
        # The dispatcher opens the slot; reaching here without a task means it did not.
        raise ValueError("add_todo dispatched without a task")
    context.store.insert(context.user_id, task)
    return DispatchOutcome(intent=intent, params={"task": task}, reply=composer.compose_added(task), mutated=True)


def handle_ask_for_task(intent: IntentTag, params: Dict[str, str], context: HandlerContext) -> DispatchOutcome:
    return DispatchOutcome(intent=intent, reply=composer.ASK_FOR_TASK)


def handle_list(intent: IntentTag, params: Dict[str, str], context: HandlerContext) -> DispatchOutcome:
    status = TaskStatus.PENDING if intent == IntentTag.LIST_PENDING else None
    tasks = context.store.list_by_status(context.user_id, status)
    return DispatchOutcome(intent=intent, reply=composer.compose_task_list(tasks, status))


def handle_complete(intent: IntentTag, params: Dict[str, str], context: HandlerContext) -> DispatchOutcome:
    title = param(params, "taskTitle")
    if title is None:
        return DispatchOutcome(intent=intent, reply=composer.ASK_WHICH_TO_COMPLETE)

    needle = title.lower()
    pending = context.store.list_by_status(context.user_id, TaskStatus.PENDING)
    # Newest match wins; no disambiguation between several matches.
    matches = sorted((t for t in pending if needle in t.text.lower()), key=lambda t: t.id, reverse=True)
    if not matches:
        logger.info(f"No pending todo matching {title!r} for user {context.user_id}")
        return DispatchOutcome(intent=intent, params={"taskTitle": title}, reply=composer.compose_not_found(title))

    target = matches[0]
    if not context.store.update_status_to_completed(target.id, context.user_id):
        return DispatchOutcome(intent=intent, params={"taskTitle": title}, reply=composer.compose_not_found(title))
    return DispatchOutcome(
        intent=intent,
        params={"taskTitle": title},
        reply=composer.compose_completed(target.text),
        mutated=True,
    )


def handle_delete(intent: IntentTag, params: Dict[str, str], context: HandlerContext) -> DispatchOutcome:
    # Never deletes by fuzzy text; the user is sent to the explicit delete action.
    title = param(params, "taskTitle")
    if title is None:
        return DispatchOutcome(intent=intent, reply=composer.ASK_WHICH_TO_DELETE)
    return DispatchOutcome(intent=intent, params={"taskTitle": title}, reply=composer.DELETE_REDIRECT)
