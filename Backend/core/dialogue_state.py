"""
Per-user pending slot storage.

A slot records the single follow-up question the assistant is waiting on for a
user. There is at most one slot per user; ``set`` overwrites, ``take`` reads and
clears in one step under the store lock so two concurrent messages can never
both consume the same slot.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

logger = logging.getLogger("dialogue_state")


class SlotType(str, Enum):
    AWAITING_TASK = "awaiting_task"


@dataclass(frozen=True)
class PendingSlot:
    user_id: str
    slot_type: SlotType
    created_at: float = field(default_factory=time.monotonic)


class DialogueStateStore:
    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._slots: Dict[str, PendingSlot] = {}
        self._lock = threading.Lock()
        self._user_locks: Dict[str, threading.Lock] = {}
        self._ttl = ttl_seconds
        self._clock = clock

    def user_lock(self, user_id: str) -> threading.Lock:
        """Per-user mutex for callers that read, decide and write the slot in one step."""
        user_id = str(user_id)
        with self._lock:
            return self._user_locks.setdefault(user_id, threading.Lock())

    def _expired(self, slot: PendingSlot) -> bool:
        return self._ttl is not None and self._clock() - slot.created_at > self._ttl

    def _live_slot(self, user_id: str) -> Optional[PendingSlot]:
        # Caller must hold the lock.
        slot = self._slots.get(user_id)
        if slot is not None and self._expired(slot):
            logger.info(f"Discarding expired {slot.slot_type.value} slot for user {user_id}")
            del self._slots[user_id]
            return None
        return slot

    def peek(self, user_id: str) -> Optional[PendingSlot]:
        with self._lock:
            return self._live_slot(str(user_id))

    def take(self, user_id: str) -> Optional[PendingSlot]:
        """Atomically return and remove the user's slot, or None."""
        user_id = str(user_id)
        with self._lock:
            slot = self._live_slot(user_id)
            if slot is not None:
                del self._slots[user_id]
        if slot is not None:
            logger.debug(f"Took {slot.slot_type.value} slot for user {user_id}")
        return slot

    def set(self, user_id: str, slot_type: SlotType = SlotType.AWAITING_TASK) -> PendingSlot:
        user_id = str(user_id)
        slot = PendingSlot(user_id=user_id, slot_type=SlotType(slot_type), created_at=self._clock())
        with self._lock:
            self._slots[user_id] = slot
        logger.debug(f"Set {slot.slot_type.value} slot for user {user_id}")
        return slot

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)
