# src/taskboard/tasks/task_service.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from ..records.models import RecordId, parse_record_id
from ..records.service import DEFAULT_LATENCY, Clock, CrudService, Latency
from ..records.store import RecordStore
from .hierarchy import descendant_ids, subtask_progress, subtasks_of
from .recurrence import DEFAULT_POLICY, RecurrencePolicy, build_instances
from .task_models import Category, SubtaskProgress, Task

logger = logging.getLogger(__name__)


class TaskService(CrudService[Task]):
    """
    Task CRUD plus the hierarchy rules:

    - create() refuses a subtask whose parent does not exist (returns None)
    - create() of a recurring task also appends its future instances
    - delete() removes the whole descendant subtree
    """

    def __init__(
        self,
        store: RecordStore[Task],
        *,
        latency: Latency = DEFAULT_LATENCY,
        clock: Clock = datetime.now,
        recurrence: RecurrencePolicy = DEFAULT_POLICY,
    ) -> None:
        super().__init__(store, latency=latency, clock=clock)
        self._recurrence = recurrence

    def _build_new(self, data: Mapping[str, Any], now: datetime) -> list[Task] | None:
        task = Task.from_data(self._store.next_id(), data, now)

        if task.parent_task_id is not None and not self._store.contains(task.parent_task_id):
            logger.warning("task create: parent not found parent_task_id=%s", task.parent_task_id)
            return None

        instances = build_instances(
            task,
            next_id=self._store.next_id,
            now=now,
            policy=self._recurrence,
        )
        if instances:
            logger.info("Recurring task %s: generated %d instances", task.id, len(instances))
        return [task, *instances]

    def _ids_to_delete(self, record_id: RecordId) -> set[RecordId]:
        return descendant_ids(self._store, record_id)

    async def get_subtasks(self, parent_id: Any) -> list[Task]:
        await self._delay("query")
        pid = parse_record_id(parent_id)
        if pid is None:
            return []
        return subtasks_of(self._store.snapshot(), pid)

    async def get_subtask_progress(self, parent_id: Any) -> SubtaskProgress:
        """completed / total direct subtasks, recomputed on every call."""
        await self._delay("query")
        pid = parse_record_id(parent_id)
        if pid is None:
            return SubtaskProgress(completed=0, total=0)
        return subtask_progress(self._store, pid)


class CategoryService:
    """Read-only category reference data."""

    def __init__(self, categories: Iterable[Category], *, latency: Latency = DEFAULT_LATENCY) -> None:
        self._categories = tuple(categories)
        self._latency = latency
        logger.info("CategoryService ready total=%s", len(self._categories))

    async def get_all(self) -> list[Category]:
        await asyncio.sleep(self._latency.get_all)
        return list(self._categories)

    async def get_by_id(self, category_id: str) -> Category | None:
        await asyncio.sleep(self._latency.get_by_id)
        for c in self._categories:
            if c.id == str(category_id):
                return c
        logger.warning("category get_by_id: not found id=%r", category_id)
        return None
