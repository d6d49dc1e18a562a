# src/taskboard/tasks/task_view.py

"""
Task list view-model: filtering, ordering and badge counts.

Pure functions over a task list; load_task_board() re-fetches from the
services and recomputes everything, so derived state never goes stale.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.ports import RecordReader
from .task_models import Category, Task, TaskPriority

ALL = "all"
TODAY = "today"
OVERDUE = "overdue"

PRIORITY_RANK: dict[str, int] = {
    TaskPriority.URGENT: 4,
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


def priority_rank(priority: Any) -> int:
    """Unknown or missing priority ranks like low."""
    if priority is None:
        return 1
    return PRIORITY_RANK.get(str(priority).lower(), 1)


def is_due_today(task: Task, now: datetime) -> bool:
    return task.due_date is not None and not task.completed and task.due_date.date() == now.date()


def is_overdue(task: Task, now: datetime) -> bool:
    return task.due_date is not None and not task.completed and task.due_date < now


def matches_selector(task: Task, selector: str, now: datetime) -> bool:
    if selector == ALL:
        return True
    if selector == TODAY:
        return is_due_today(task, now)
    if selector == OVERDUE:
        return is_overdue(task, now)
    return task.category == selector


def matches_search(task: Task, term: str) -> bool:
    term = term.lower()
    if term in (task.title or "").lower():
        return True
    return term in (task.description or "").lower()


def filter_tasks(
    tasks: Iterable[Task],
    selector: str = ALL,
    search: str = "",
    *,
    now: datetime | None = None,
) -> list[Task]:
    now = now or datetime.now()
    out = [t for t in tasks if matches_selector(t, selector, now)]
    if search:
        out = [t for t in out if matches_search(t, search)]
    return out


def sort_key(task: Task) -> tuple:
    """
    Composite order:
    incomplete first, then higher priority, then earlier due date
    (dated before undated), then newest created first.
    """
    due = task.due_date
    return (
        task.completed,
        -priority_rank(task.priority),
        due is None,
        due or datetime.min,
        -task.created_at.timestamp(),
    )


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=sort_key)


def visible_tasks(
    tasks: Iterable[Task],
    selector: str = ALL,
    search: str = "",
    *,
    now: datetime | None = None,
) -> list[Task]:
    return sort_tasks(filter_tasks(tasks, selector, search, now=now))


def task_counts(
    tasks: Iterable[Task],
    categories: Iterable[Category] = (),
    *,
    now: datetime | None = None,
) -> dict[str, int]:
    """
    Badge counts over top-level, incomplete tasks.

    Keys: "all", "today", "overdue" and one per category id.
    """
    now = now or datetime.now()
    open_roots = [t for t in tasks if t.is_top_level and not t.completed]

    counts = {
        ALL: len(open_roots),
        TODAY: sum(1 for t in open_roots if is_due_today(t, now)),
        OVERDUE: sum(1 for t in open_roots if is_overdue(t, now)),
    }
    for c in categories:
        counts[c.id] = sum(1 for t in open_roots if t.category == c.id)
    return counts


def completion_rate(tasks: Sequence[Task]) -> float:
    """Percentage of completed tasks (subtasks included); 0 for an empty list."""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.completed)
    return done / len(tasks) * 100


@dataclass(frozen=True, slots=True)
class TaskBoard:
    selector: str
    search: str
    tasks: list[Task]
    counts: dict[str, int]
    completion_rate: float
    categories: list[Category]


async def load_task_board(
    tasks: RecordReader[Task],
    categories: RecordReader[Category],
    *,
    selector: str = ALL,
    search: str = "",
    now: datetime | None = None,
) -> TaskBoard:
    """Fetch tasks and categories together and derive the visible board."""
    all_tasks, all_categories = await asyncio.gather(tasks.get_all(), categories.get_all())
    now = now or datetime.now()
    return TaskBoard(
        selector=selector,
        search=search,
        tasks=visible_tasks(all_tasks, selector, search, now=now),
        counts=task_counts(all_tasks, all_categories, now=now),
        completion_rate=completion_rate(all_tasks),
        categories=all_categories,
    )
