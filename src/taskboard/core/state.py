# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..crm.crm_services import CompanyService, ContactService, DealService, LeadService
from ..tasks.task_service import CategoryService, TaskService


@dataclass
class AppState:
    """
    Everything a session needs, built once by the bootstrap and passed around.

    Each AppState owns private stores: two states never share records.
    """

    settings: Any

    tasks: TaskService
    categories: CategoryService
    contacts: ContactService
    companies: CompanyService
    deals: DealService
    leads: LeadService
