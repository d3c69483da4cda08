"""Reply text for every dispatcher outcome. Pure formatting, no I/O."""
from __future__ import annotations

from typing import Optional, Sequence

from services.task_store import TaskRecord, TaskStatus

STATUS_GLYPHS = {
    TaskStatus.PENDING: "⏳",
    TaskStatus.COMPLETED: "✅",
}

ASK_FOR_TASK = "What task would you like me to add?"
ASK_WHICH_TO_COMPLETE = "Please specify which todo you'd like me to mark as complete."
ASK_WHICH_TO_DELETE = "Please specify which todo you'd like me to delete."
DELETE_REDIRECT = (
    "I can help you delete todos. Please use the delete button in the main interface for safety."
)
GENERIC_FALLBACK = "⚠️ Sorry, I ran into a problem handling that. Please try again."
EMPTY_PENDING = "🎉 You have no pending todos. Nice work, you're all caught up!"
EMPTY_ALL = "You don't have any todos yet. Try \"add todo: buy milk\" to create your first one."

HELP_TEXT = "\n".join([
    "Here's what I can do:",
    "• \"add todo: buy milk\" creates a todo (or just say \"add a todo\" and I'll ask)",
    "• \"show pending todos\" lists what's left",
    "• \"show all todos\" lists everything",
    "• \"mark milk as done\" completes the newest matching todo",
    "• anything else goes to a chat assistant",
])


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def enumerate_tasks(tasks: Sequence[TaskRecord]) -> str:
    return "\n".join(
        f"{i}. {STATUS_GLYPHS.get(t.status, '•')} {t.text}" for i, t in enumerate(tasks, start=1)
    )


def compose_task_list(tasks: Sequence[TaskRecord], status: Optional[TaskStatus] = None) -> str:
    if not tasks:
        return EMPTY_PENDING if status == TaskStatus.PENDING else EMPTY_ALL
    if status == TaskStatus.PENDING:
        header = f"You have {pluralize(len(tasks), 'pending todo')}:"
    else:
        done = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
        header = f"You have {pluralize(len(tasks), 'todo')} ({done} completed):"
    return f"{header}\n{enumerate_tasks(tasks)}"


def compose_added(task: str) -> str:
    return f"✅ Added new todo: \"{task}\""


def compose_completed(task: str) -> str:
    return f"✅ Marked \"{task}\" as completed."


def compose_not_found(title: str) -> str:
    return f"⚠️ I couldn't find a pending todo matching \"{title}\"."
