from __future__ import annotations

import logging
from typing import Dict

from ..intents import DispatchOutcome, IntentTag
from .base import HandlerContext

logger = logging.getLogger("handlers.general_chat")


def handle(intent: IntentTag, params: Dict[str, str], context: HandlerContext) -> DispatchOutcome:
    result = context.gateway.generate(context.message)
    if not result.ok:
        logger.info(f"Chat fallback used ({result.error})")
    return DispatchOutcome(intent=intent, reply=result.text)
