"""
Rule-based intent classifier.

Rules are evaluated top to bottom and the first rule whose keywords appear in
the lower-cased message wins. Keyword matching is plain substring containment,
so "completely" triggers the completion rule and "address" triggers the add
rule. Keep the order of RULES stable: clients depend on the precedence.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .intents import IntentTag, RecognitionResult

Extractor = Callable[[str], Dict[str, str]]

# Words that may sit between the command keyword and the actual task text.
_ADD_FILLER = r"(?:(?:a|an|the|my|new|another)\s+)*"
_TARGET_FILLER = r"(?:(?:the|my|a|an)\s+)*"
_NOUN = r"(?:(?:todo|task)s?\b)?"
_AS_DONE = r"(?:as\s+(?:done|completed?|finished)\b)?"

# Fillers are only skipped when a todo/task noun follows them.
_ADD_RE = re.compile(
    rf"\b(?:add|new|create)\b\s*(?:{_ADD_FILLER}(?:todo|task)s?\b)?\s*:?\s*(.*)$",
    re.IGNORECASE | re.DOTALL,
)
_COMPLETE_RE = re.compile(
    rf"\b(?:completed?|done|marked|mark|finished|finish|check(?:ed)? off)\b\s*"
    rf"{_TARGET_FILLER}{_NOUN}\s*{_AS_DONE}\s*:?\s*(.*)$",
    re.IGNORECASE | re.DOTALL,
)
_DELETE_RE = re.compile(
    rf"\b(?:delete|remove|drop)\b\s*{_TARGET_FILLER}{_NOUN}\s*:?\s*(.*)$",
    re.IGNORECASE | re.DOTALL,
)
_TRAILING_PUNCT = re.compile(r"[\s.!?]+$")
_TRAILING_AS_DONE = re.compile(r"\s+as\s+(?:done|completed?|finished)$", re.IGNORECASE)
_TRAILING_NOUN = re.compile(r"\s+(?:todo|task)s?$", re.IGNORECASE)


def _capture(pattern: re.Pattern, text: str) -> str:
    m = pattern.search(text)
    if not m:
        return ""
    return m.group(1).strip()


def extract_task(text: str) -> Dict[str, str]:
    task = _capture(_ADD_RE, text)
    return {"task": task} if task else {}


def _extract_title(pattern: re.Pattern, text: str) -> Dict[str, str]:
    title = _TRAILING_PUNCT.sub("", _capture(pattern, text))
    title = _TRAILING_AS_DONE.sub("", title)
    title = _TRAILING_NOUN.sub("", title).strip()
    return {"taskTitle": title} if title else {}


def extract_completion_target(text: str) -> Dict[str, str]:
    return _extract_title(_COMPLETE_RE, text)


def extract_deletion_target(text: str) -> Dict[str, str]:
    return _extract_title(_DELETE_RE, text)


def _no_params(_text: str) -> Dict[str, str]:
    return {}


@dataclass(frozen=True)
class Rule:
    intent: IntentTag
    keywords: Tuple[str, ...]
    extractor: Extractor = _no_params

    def matches(self, lowered: str) -> bool:
        return any(k in lowered for k in self.keywords)


RULES: Tuple[Rule, ...] = (
    Rule(IntentTag.LIST_PENDING, ("pending", "incomplete", "unfinished")),
    Rule(IntentTag.ADD_TODO, ("add", "new", "create"), extract_task),
    Rule(IntentTag.COMPLETE_TODO, ("complete", "done", "mark", "finish", "check off"), extract_completion_target),
    Rule(IntentTag.DELETE_TODO, ("delete", "remove", "drop"), extract_deletion_target),
    Rule(IntentTag.LIST_ALL, ("all", "list", "show all")),
    Rule(IntentTag.HELP, ("help", "what can you do", "commands")),
)


def match_rule(text: str) -> Optional[Rule]:
    """Return the first rule that fires for ``text`` or None for free chat."""
    lowered = (text or "").lower()
    for rule in RULES:
        if rule.matches(lowered):
            return rule
    return None


def classify(text: str) -> RecognitionResult:
    """Map a free-text message to an intent tag and extracted parameters."""
    text = (text or "").strip()
    rule = match_rule(text)
    if rule is None:
        return RecognitionResult(intent=IntentTag.CHAT)
    return RecognitionResult(intent=rule.intent, params=rule.extractor(text))
