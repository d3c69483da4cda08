"""
Intent tags and the transient result models passed between the classifier,
the dispatcher and the HTTP layer.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class IntentTag(str, Enum):
    CHAT = "chat"
    LIST_PENDING = "list_pending"
    ADD_TODO = "add_todo"
    COMPLETE_TODO = "complete_todo"
    DELETE_TODO = "delete_todo"
    LIST_ALL = "list_all"
    HELP = "help"
    ASK_FOR_TASK = "ask_for_task"


class RecognitionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent: IntentTag
    params: Dict[str, str] = Field(default_factory=dict)


class DispatchOutcome(BaseModel):
    intent: IntentTag
    params: Dict[str, str] = Field(default_factory=dict)
    reply: str
    mutated: bool = False
