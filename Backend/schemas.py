from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field

from core.intents import IntentTag


class MessageRequest(BaseModel):
    # Optional so a missing message reaches the endpoint and gets the 400 envelope.
    message: Optional[str] = None

    @property
    def text(self) -> str:
        return (self.message or "").strip()


class NlpResponse(BaseModel):
    intent: IntentTag
    params: Dict[str, str] = Field(default_factory=dict)
    message: Optional[str] = None


class ChatResponse(BaseModel):
    reply: str


class TranslateRequest(BaseModel):
    text: Optional[str] = None
    target: Optional[str] = None


class TranslateResponse(BaseModel):
    translation: str
    target: str
    ok: bool


class TodoCreate(BaseModel):
    task: Optional[str] = None
