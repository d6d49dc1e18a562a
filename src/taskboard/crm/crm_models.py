# src/taskboard/crm/crm_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, ClassVar

from ..records.models import (
    Record,
    RecordId,
    coerce_record_id,
    integer,
    number,
    parse_timestamp,
    string_list,
    text,
)


class DealStage(StrEnum):
    DISCOVERY = "discovery"
    QUALIFICATION = "qualification"
    DEMO = "demo"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed-won"
    CLOSED_LOST = "closed-lost"

    @classmethod
    def parse(cls, raw: Any) -> DealStage:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.DISCOVERY


@dataclass(slots=True)
class Contact(Record):
    ENTITY: ClassVar[str] = "contact"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = (
        "first_name",
        "last_name",
        "email",
        "company_name",
        "title",
    )
    TOUCH_FIELD: ClassVar[str | None] = "last_contact_date"
    TOUCH_FROM_PATCH: ClassVar[bool] = True
    COERCERS: ClassVar[dict[str, Any]] = {
        "first_name": text,
        "last_name": text,
        "email": text,
        "phone": text,
        "title": text,
        "company_id": coerce_record_id,
        "company_name": text,
        "status": text,
        "source": text,
        "last_contact_date": parse_timestamp,
        "notes": text,
        "tags": string_list,
        "created_at": parse_timestamp,
    }

    id: RecordId
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    title: str = ""
    company_id: RecordId | None = None
    company_name: str = ""
    status: str = "active"
    source: str = "manual"
    last_contact_date: datetime = field(default_factory=datetime.now)
    notes: str = ""
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(slots=True)
class Company(Record):
    ENTITY: ClassVar[str] = "company"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("name", "industry", "primary_contact")
    TOUCH_FIELD: ClassVar[str | None] = "last_activity"
    COERCERS: ClassVar[dict[str, Any]] = {
        "name": text,
        "industry": text,
        "size": text,
        "website": text,
        "phone": text,
        "address": text,
        "status": text,
        "tier": text,
        "revenue": integer,
        "employees": integer,
        "primary_contact": text,
        "notes": text,
        "tags": string_list,
        "created_at": parse_timestamp,
        "last_activity": parse_timestamp,
    }

    id: RecordId
    name: str = ""
    industry: str = ""
    size: str = ""
    website: str = ""
    phone: str = ""
    address: str = ""
    status: str = "active"
    tier: str = "small"
    revenue: int = 0
    employees: int = 0
    primary_contact: str = ""
    notes: str = ""
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)


@dataclass(slots=True)
class DealActivity:
    date: datetime
    type: str = "note"
    description: str = ""
    outcome: str = "pending"

    @classmethod
    def from_dict(cls, data: dict[str, Any], now: datetime | None = None) -> DealActivity:
        return cls(
            date=parse_timestamp(data.get("date")) or now or datetime.now(),
            type=str(data.get("type") or "note"),
            description=str(data.get("description") or ""),
            outcome=str(data.get("outcome") or "pending"),
        )


def _activities(raw: Any) -> list[DealActivity]:
    if not isinstance(raw, (list, tuple)):
        raise TypeError(f"expected a list of activities, got {type(raw).__name__}")
    return [a if isinstance(a, DealActivity) else DealActivity.from_dict(a) for a in raw]


@dataclass(slots=True)
class Deal(Record):
    ENTITY: ClassVar[str] = "deal"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("name", "company_name", "contact_name", "description")
    CLEARABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"notes", "description"})
    TOUCH_FIELD: ClassVar[str | None] = "updated_at"
    COERCERS: ClassVar[dict[str, Any]] = {
        "name": text,
        "company_id": coerce_record_id,
        "company_name": text,
        "contact_id": coerce_record_id,
        "contact_name": text,
        "value": number,
        "stage": DealStage.parse,
        "probability": integer,
        "expected_close_date": parse_timestamp,
        "owner": text,
        "source": text,
        "description": text,
        "notes": text,
        "tags": string_list,
        "activities": _activities,
        "created_at": parse_timestamp,
        "updated_at": parse_timestamp,
    }

    id: RecordId
    name: str = ""
    company_id: RecordId | None = None
    company_name: str = ""
    contact_id: RecordId | None = None
    contact_name: str = ""
    value: float = 0.0
    stage: DealStage = DealStage.DISCOVERY
    probability: int = 0
    expected_close_date: datetime | None = None
    owner: str = "Sales Rep 1"
    source: str = "manual"
    description: str = ""
    notes: str = ""
    tags: list[str] = field(default_factory=list)
    activities: list[DealActivity] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def _complete_new(cls, values: dict[str, Any], now: datetime) -> None:
        # New deals start without history.
        values["activities"] = []


@dataclass(slots=True)
class Lead(Record):
    ENTITY: ClassVar[str] = "lead"
    SEARCH_FIELDS: ClassVar[tuple[str, ...]] = ("first_name", "last_name", "email", "company", "title")
    TOUCH_FIELD: ClassVar[str | None] = "last_activity"
    COERCERS: ClassVar[dict[str, Any]] = {
        "first_name": text,
        "last_name": text,
        "email": text,
        "phone": text,
        "company": text,
        "title": text,
        "industry": text,
        "lead_source": text,
        "status": text,
        "score": integer,
        "budget": integer,
        "timeline": text,
        "notes": text,
        "tags": string_list,
        "created_at": parse_timestamp,
        "last_activity": parse_timestamp,
        "assigned_to": text,
    }

    id: RecordId
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    title: str = ""
    industry: str = ""
    lead_source: str = "manual"
    status: str = "new"
    score: int = 0
    budget: int = 0
    timeline: str = ""
    notes: str = ""
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)
    assigned_to: str = "Sales Rep 1"
