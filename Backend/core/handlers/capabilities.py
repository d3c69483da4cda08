from __future__ import annotations

from typing import Dict

from .. import composer
from ..intents import DispatchOutcome, IntentTag
from .base import HandlerContext


def handle(intent: IntentTag, params: Dict[str, str], context: HandlerContext) -> DispatchOutcome:
    return DispatchOutcome(intent=intent, reply=composer.HELP_TEXT)
