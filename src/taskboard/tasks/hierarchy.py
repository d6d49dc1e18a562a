# src/taskboard/tasks/hierarchy.py

"""
Parent -> subtask relationships.

Everything here is derived from the current task list on every call;
nothing is cached. Parent completion is never changed by a subtask.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..records.models import RecordId
from .task_models import SubtaskProgress, Task


def subtasks_of(tasks: Iterable[Task], parent_id: RecordId) -> list[Task]:
    """Direct subtasks of parent_id, in store order."""
    return [t for t in tasks if t.parent_task_id == parent_id]


def subtask_progress(tasks: Iterable[Task], parent_id: RecordId) -> SubtaskProgress:
    children = subtasks_of(tasks, parent_id)
    done = sum(1 for t in children if t.completed)
    return SubtaskProgress(completed=done, total=len(children))


def descendant_ids(tasks: Iterable[Task], root_id: RecordId) -> set[RecordId]:
    """
    root_id plus every task below it, at any depth.

    Walks the parent links breadth-first; a malformed cycle cannot loop
    because each id is visited once.
    """
    children: dict[RecordId, list[RecordId]] = {}
    for t in tasks:
        if t.parent_task_id is not None:
            children.setdefault(t.parent_task_id, []).append(t.id)

    found = {root_id}
    frontier = [root_id]
    while frontier:
        nxt: list[RecordId] = []
        for pid in frontier:
            for cid in children.get(pid, ()):
                if cid not in found:
                    found.add(cid)
                    nxt.append(cid)
        frontier = nxt
    return found
