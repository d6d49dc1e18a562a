# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.cli.bootstrap import create_initial_state
from taskboard.config import DEFAULT_SEED_DIR
from taskboard.core.state import AppState
from taskboard.crm.crm_models import Company, Contact, Deal, Lead
from taskboard.crm.crm_services import CompanyService, ContactService, DealService, LeadService
from taskboard.records.service import NO_LATENCY
from taskboard.records.store import RecordStore
from taskboard.tasks.task_models import Category, Task
from taskboard.tasks.task_service import CategoryService, TaskService

from .fakes import FakeClock


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 9, 0))


@pytest.fixture()
def task_service(clock: FakeClock) -> TaskService:
    return TaskService(RecordStore(Task), latency=NO_LATENCY, clock=clock)


@pytest.fixture()
def category_service() -> CategoryService:
    return CategoryService(
        [Category(id="work", name="Work"), Category(id="home", name="Home")],
        latency=NO_LATENCY,
    )


@pytest.fixture()
def contact_service(clock: FakeClock) -> ContactService:
    return ContactService(RecordStore(Contact), latency=NO_LATENCY, clock=clock)


@pytest.fixture()
def company_service(clock: FakeClock) -> CompanyService:
    return CompanyService(RecordStore(Company), latency=NO_LATENCY, clock=clock)


@pytest.fixture()
def deal_service(clock: FakeClock) -> DealService:
    return DealService(RecordStore(Deal), latency=NO_LATENCY, clock=clock)


@pytest.fixture()
def lead_service(clock: FakeClock, contact_service: ContactService) -> LeadService:
    return LeadService(RecordStore(Lead), contacts=contact_service, latency=NO_LATENCY, clock=clock)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        seed_dir=DEFAULT_SEED_DIR,
        latency_scale=0.0,
        recurrence_daily_count=7,
        recurrence_weekly_count=4,
        recurrence_monthly_count=3,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState built from the packaged seed data, without simulated latency."""
    return create_initial_state(settings=settings)
