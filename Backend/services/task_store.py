from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Protocol

logger = logging.getLogger("task_store")


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TaskRecord:
    id: int
    user_id: str
    text: str
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "task": self.text,
            "status": self.status.value,
            "created_at": self.created_at.isoformat().replace("+00:00", "Z"),
        }


class TaskStore(Protocol):
    """Operations the assistant needs from the task persistence layer."""

    def list_by_status(self, user_id: str, status: Optional[TaskStatus] = None) -> List[TaskRecord]: ...

    def insert(self, user_id: str, text: str) -> int: ...

    def update_status_to_completed(self, record_id: int, user_id: str) -> bool: ...


class InMemoryTaskStore:
    """Thread-safe task store keeping records in process memory.

    Ids are allocated from a single counter shared by all users, so descending
    id order is also newest-first order.
    """

    def __init__(self) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def list_by_status(self, user_id: str, status: Optional[TaskStatus] = None) -> List[TaskRecord]:
        user_id = str(user_id)
        with self._lock:
            rows = [
                r for r in self._records.values()
                if r.user_id == user_id and (status is None or r.status == TaskStatus(status))
            ]
        return sorted(rows, key=lambda r: r.id, reverse=True)

    def insert(self, user_id: str, text: str) -> int:
        text = (text or "").strip()
        if not text:
            raise ValueError("Task text is required")
        with self._lock:
            record_id = next(self._ids)
            self._records[record_id] = TaskRecord(id=record_id, user_id=str(user_id), text=text)
        logger.info(f"Inserted task {record_id} for user {user_id}")
        return record_id

    def update_status_to_completed(self, record_id: int, user_id: str) -> bool:
        with self._lock:
            record = self._records.get(int(record_id))
            if record is None or record.user_id != str(user_id):
                return False
            self._records[record.id] = replace(record, status=TaskStatus.COMPLETED)
        logger.info(f"Completed task {record_id} for user {user_id}")
        return True

    def delete(self, record_id: int, user_id: str) -> bool:
        with self._lock:
            record = self._records.get(int(record_id))
            if record is None or record.user_id != str(user_id):
                return False
            del self._records[record.id]
        logger.info(f"Deleted task {record_id} for user {user_id}")
        return True
