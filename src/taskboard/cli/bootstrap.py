# src/taskboard/cli/bootstrap.py

"""
Composition root.

- loads settings once (or takes them from the caller),
- reads the seed fixtures,
- builds one private RecordStore per entity,
- wires the services into AppState.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..crm.crm_models import Company, Contact, Deal, Lead
from ..crm.crm_services import CompanyService, ContactService, DealService, LeadService
from ..records.errors import FixtureError
from ..records.fixtures import load_records, read_fixture
from ..records.service import DEFAULT_LATENCY
from ..records.store import RecordStore
from ..tasks.recurrence import RecurrencePolicy
from ..tasks.task_models import Category, Task
from ..tasks.task_service import CategoryService, TaskService

logger = logging.getLogger(__name__)


def load_categories(path: Path) -> list[Category]:
    items = read_fixture(path)
    try:
        return [Category.from_dict(item) for item in items]
    except ValueError as e:
        raise FixtureError(f"{path}: {e}") from e


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    seed_dir = Path(settings.seed_dir)
    latency = DEFAULT_LATENCY.scaled(settings.latency_scale)
    recurrence = RecurrencePolicy(
        daily=settings.recurrence_daily_count,
        weekly=settings.recurrence_weekly_count,
        monthly=settings.recurrence_monthly_count,
    )

    contacts = ContactService(
        RecordStore(Contact, load_records(seed_dir / "contacts.json", Contact)),
        latency=latency,
    )

    state = AppState(
        settings=settings,
        tasks=TaskService(
            RecordStore(Task, load_records(seed_dir / "tasks.json", Task)),
            latency=latency,
            recurrence=recurrence,
        ),
        categories=CategoryService(load_categories(seed_dir / "categories.json"), latency=latency),
        contacts=contacts,
        companies=CompanyService(
            RecordStore(Company, load_records(seed_dir / "companies.json", Company)),
            latency=latency,
        ),
        deals=DealService(
            RecordStore(Deal, load_records(seed_dir / "deals.json", Deal)),
            latency=latency,
        ),
        leads=LeadService(
            RecordStore(Lead, load_records(seed_dir / "leads.json", Lead)),
            contacts=contacts,
            latency=latency,
        ),
    )
    logger.info("AppState ready seed_dir=%s latency_scale=%s", seed_dir, settings.latency_scale)
    return state
