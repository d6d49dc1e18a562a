# src/taskboard/tasks/recurrence.py

"""
Future instances for recurring tasks.

Instances are plain, independent tasks: they copy the template's
title / description / priority / category / parent and get a shifted due
date, but are not recurring themselves and keep no link to the template.
Due dates are computed from the base date (base + step * n), so monthly
series clamp to month end without drifting (Jan 31 -> Feb 29 -> Mar 31).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from dateutil.relativedelta import relativedelta

from ..records.models import RecordId
from .task_models import RecurrenceFrequency, Task

logger = logging.getLogger(__name__)

_STEPS: dict[RecurrenceFrequency, relativedelta] = {
    RecurrenceFrequency.DAILY: relativedelta(days=1),
    RecurrenceFrequency.WEEKLY: relativedelta(weeks=1),
    RecurrenceFrequency.MONTHLY: relativedelta(months=1),
}


@dataclass(frozen=True, slots=True)
class RecurrencePolicy:
    """How many future instances to create per frequency."""

    daily: int = 7
    weekly: int = 4
    monthly: int = 3

    def count_for(self, frequency: RecurrenceFrequency) -> int:
        return max(0, int(getattr(self, frequency.value)))


DEFAULT_POLICY = RecurrencePolicy()


def project_due_dates(base: datetime, frequency: RecurrenceFrequency, count: int) -> list[datetime]:
    step = _STEPS[frequency]
    return [base + step * n for n in range(1, count + 1)]


def build_instances(
    template: Task,
    *,
    next_id: Callable[[], RecordId],
    now: datetime,
    policy: RecurrencePolicy = DEFAULT_POLICY,
) -> list[Task]:
    """
    Instances for a freshly created recurring task.

    Nothing is generated without an anchor due date or a known frequency.
    """
    if not template.is_recurring:
        return []

    frequency = template.recurring_frequency
    if frequency is None or template.due_date is None:
        logger.info(
            "Recurring task %s has no due date or frequency; no instances generated",
            template.id,
        )
        return []

    dues = project_due_dates(template.due_date, frequency, policy.count_for(frequency))
    return [
        Task(
            id=next_id(),
            title=template.title,
            description=template.description,
            priority=template.priority,
            due_date=due,
            parent_task_id=template.parent_task_id,
            category=template.category,
            created_at=now,
            updated_at=now,
        )
        for due in dues
    ]
