# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, ClassVar

from ..records.models import (
    Record,
    RecordId,
    coerce_record_id,
    flag,
    optional_text,
    parse_timestamp,
    text,
)


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def parse(cls, raw: Any) -> TaskPriority:
        """Unknown values rank like LOW."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.LOW


class RecurrenceFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, raw: Any) -> RecurrenceFrequency | None:
        if raw is None or isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


@dataclass(slots=True)
class Task(Record):
    ENTITY: ClassVar[str] = "task"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("title", "description")
    CLEARABLE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"description", "generated_description", "completed_at", "due_date"}
    )
    TOUCH_FIELD: ClassVar[str | None] = "updated_at"
    COERCERS: ClassVar[dict[str, Any]] = {
        "title": text,
        "description": text,
        "generated_description": optional_text,
        "priority": TaskPriority.parse,
        "completed": flag,
        "completed_at": parse_timestamp,
        "due_date": parse_timestamp,
        "parent_task_id": coerce_record_id,
        "is_recurring": flag,
        "recurring_frequency": RecurrenceFrequency.parse,
        "category": text,
        "created_at": parse_timestamp,
        "updated_at": parse_timestamp,
    }

    id: RecordId
    title: str = ""
    description: str = ""
    generated_description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    completed: bool = False
    completed_at: datetime | None = None
    due_date: datetime | None = None
    parent_task_id: RecordId | None = None
    is_recurring: bool = False
    recurring_frequency: RecurrenceFrequency | None = None
    category: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_top_level(self) -> bool:
        return self.parent_task_id is None

    @classmethod
    def _complete_new(cls, values: dict[str, Any], now: datetime) -> None:
        if values.get("completed") and values.get("completed_at") is None:
            values["completed_at"] = now

    def _complete_changes(self, changes: dict[str, Any], now: datetime) -> None:
        # Completion bookkeeping: completed_at follows the completed flag.
        if "completed" not in changes:
            return
        if not changes["completed"]:
            changes["completed_at"] = None
        elif changes.get("completed_at") is None:
            changes["completed_at"] = self.completed_at if self.completed and self.completed_at else now


@dataclass(frozen=True, slots=True)
class Category:
    """Reference data used to group and count tasks."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Category:
        if data.get("id") is None:
            raise ValueError("category record without id")
        return cls(id=str(data["id"]), name=str(data.get("name") or ""))


@dataclass(frozen=True, slots=True)
class SubtaskProgress:
    completed: int
    total: int

    @property
    def ratio(self) -> float:
        return self.completed / self.total if self.total else 0.0
