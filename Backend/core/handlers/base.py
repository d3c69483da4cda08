from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from services.completion_gateway import RemoteCompletionGateway
from services.task_store import TaskStore


@dataclass
class HandlerContext:
    user_id: str
    message: str
    store: TaskStore
    gateway: RemoteCompletionGateway


def param(params: Dict[str, str], name: str) -> Optional[str]:
    """Return a stripped parameter value, or None when missing or blank."""
    value = (params or {}).get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None
