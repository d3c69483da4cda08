"""
Conversational endpoints.

/api/nlp   -> intent recognition only (opens/consumes the pending slot)
/api/chat  -> full dispatch; always answers 200 with a reply once the body is valid
/api/translate -> best-effort translation through the inference gateway
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from core import composer
from core.dispatcher import ActionDispatcher
from core.intents import IntentTag
from dependencies import get_dispatcher, get_gateway, get_user_id
from schemas import ChatResponse, MessageRequest, NlpResponse, TranslateRequest, TranslateResponse
from services.completion_gateway import RemoteCompletionGateway
from utils.response import failure_response

logger = logging.getLogger("app_route")
router = APIRouter(prefix="/api", tags=["assistant"])


@router.post("/nlp", response_model=NlpResponse, response_model_exclude_none=True)
def recognize_message(
    payload: MessageRequest,
    user_id: str = Depends(get_user_id),
    dispatcher: ActionDispatcher = Depends(get_dispatcher),
):
    if not payload.text:
        return failure_response("Message is required")

    result = dispatcher.recognize(user_id, payload.text)
    logger.info(f"NLP user={user_id} intent={result.intent.value} params={result.params}")
    if result.intent == IntentTag.ASK_FOR_TASK:
        return NlpResponse(intent=result.intent, params={}, message=composer.ASK_FOR_TASK)
    return NlpResponse(intent=result.intent, params=dict(result.params))


@router.post("/chat", response_model=ChatResponse)
def chat(
    payload: MessageRequest,
    user_id: str = Depends(get_user_id),
    dispatcher: ActionDispatcher = Depends(get_dispatcher),
):
    if not payload.text:
        return failure_response("Message is required")

    try:
        outcome = dispatcher.dispatch(user_id, payload.text)
    except Exception:
        logger.exception("Chat dispatch failed")
        return ChatResponse(reply=composer.GENERIC_FALLBACK)
    return ChatResponse(reply=outcome.reply)


@router.post("/translate", response_model=TranslateResponse)
def translate(payload: TranslateRequest, gateway: RemoteCompletionGateway = Depends(get_gateway)):
    text = (payload.text or "").strip()
    if not text:
        return failure_response("Text is required")

    target = gateway.resolve_language(payload.target)
    result = gateway.translate(text, target)
    return TranslateResponse(translation=result.text, target=target, ok=result.ok)
