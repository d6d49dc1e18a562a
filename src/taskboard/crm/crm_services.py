# src/taskboard/crm/crm_services.py

"""
CRM services: the generic CRUD service plus each entity's lookups.

The id-based helpers follow the same rules as the CRUD operations:
not found -> None / False, unexpected failure -> RecordStoreError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.ports import CrudRepo
from ..records.models import integer, parse_record_id, round_half_up
from ..records.service import DEFAULT_LATENCY, Clock, CrudService, Latency
from ..records.store import RecordStore
from .crm_models import Company, Contact, Deal, DealActivity, DealStage, Lead

logger = logging.getLogger(__name__)


class ContactService(CrudService[Contact]):
    async def get_by_company(self, company_id: Any) -> list[Contact]:
        cid = parse_record_id(company_id)
        return await self._query(lambda c: cid is not None and c.company_id == cid)

    async def get_by_status(self, status: str) -> list[Contact]:
        return await self._query(lambda c: c.status == status)


class CompanyService(CrudService[Company]):
    async def get_by_tier(self, tier: str) -> list[Company]:
        return await self._query(lambda c: c.tier == tier)

    async def get_by_industry(self, industry: str) -> list[Company]:
        return await self._query(lambda c: c.industry == industry)

    async def get_active_companies(self) -> list[Company]:
        return await self._query(lambda c: c.status == "active")


@dataclass(frozen=True, slots=True)
class PipelineStage:
    deals: list[Deal]
    count: int
    total_value: float
    avg_value: float


class DealService(CrudService[Deal]):
    async def get_by_stage(self, stage: str) -> list[Deal]:
        wanted = DealStage.parse(stage)
        return await self._query(lambda d: d.stage == wanted)

    async def get_by_owner(self, owner: str) -> list[Deal]:
        return await self._query(lambda d: d.owner == owner)

    async def get_by_company(self, company_id: Any) -> list[Deal]:
        cid = parse_record_id(company_id)
        return await self._query(lambda d: cid is not None and d.company_id == cid)

    async def add_activity(self, deal_id: Any, activity: Mapping[str, Any]) -> bool:
        """Append a dated activity to the deal's history."""
        await self._delay("add_activity")
        rid = self._resolve(deal_id, "add_activity")
        if rid is None:
            return False

        now = self._clock()
        with self._guard("add_activity", rid):
            entry = DealActivity(
                date=now,
                type=str(activity.get("type") or "note"),
                description=str(activity.get("description") or ""),
                outcome=str(activity.get("outcome") or "pending"),
            )
            idx = self._store.index_of(rid)
            deal = self._store.at(idx)
            self._store.put(
                idx,
                deal.merge({"activities": [*deal.activities, entry], "updated_at": now}, now),
            )

        logger.info("deal %s: activity added type=%s", rid, entry.type)
        return True

    async def get_pipeline_data(self) -> dict[DealStage, PipelineStage]:
        deals = await self._query(lambda d: True)
        out: dict[DealStage, PipelineStage] = {}
        for stage in DealStage:
            stage_deals = [d for d in deals if d.stage == stage]
            total = sum(d.value for d in stage_deals)
            out[stage] = PipelineStage(
                deals=stage_deals,
                count=len(stage_deals),
                total_value=total,
                avg_value=total / len(stage_deals) if stage_deals else 0.0,
            )
        return out


@dataclass(frozen=True, slots=True)
class LeadStats:
    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    avg_score: int = 0
    total_budget: int = 0


_LEAD_STAT_STATUSES = ("new", "contacted", "qualified", "nurturing")


class LeadService(CrudService[Lead]):
    def __init__(
        self,
        store: RecordStore[Lead],
        *,
        contacts: CrudRepo[Contact],
        latency: Latency = DEFAULT_LATENCY,
        clock: Clock = datetime.now,
    ) -> None:
        super().__init__(store, latency=latency, clock=clock)
        self._contacts = contacts

    async def get_by_status(self, status: str) -> list[Lead]:
        return await self._query(lambda lead: lead.status == status)

    async def get_by_source(self, source: str) -> list[Lead]:
        return await self._query(lambda lead: lead.lead_source == source)

    async def get_by_assignee(self, assignee: str) -> list[Lead]:
        return await self._query(lambda lead: lead.assigned_to == assignee)

    async def update_score(self, lead_id: Any, score: Any) -> bool:
        await self._delay("query")
        rid = self._resolve(lead_id, "update_score")
        if rid is None:
            return False

        now = self._clock()
        with self._guard("update_score", rid):
            idx = self._store.index_of(rid)
            self._store.put(idx, self._store.at(idx).merge({"score": integer(score)}, now))

        logger.info("lead %s: score=%s", rid, score)
        return True

    async def get_lead_stats(self) -> LeadStats:
        leads = await self._query(lambda lead: True)
        total = len(leads)
        return LeadStats(
            total=total,
            by_status={s: sum(1 for lead in leads if lead.status == s) for s in _LEAD_STAT_STATUSES},
            avg_score=round_half_up(sum(lead.score for lead in leads) / total) if total else 0,
            total_budget=sum(lead.budget for lead in leads),
        )

    async def convert_to_contact(
        self, lead_id: Any, overrides: Mapping[str, Any] | None = None
    ) -> Contact | None:
        """
        Turn a lead into a contact.

        The contact is created first; the lead is removed only once that
        succeeded, so a failure never loses the lead.
        """
        await self._delay("convert")
        rid = self._resolve(lead_id, "convert_to_contact")
        if rid is None:
            return None

        lead = self._store.at(self._store.index_of(rid))
        data: dict[str, Any] = {
            "first_name": lead.first_name,
            "last_name": lead.last_name,
            "email": lead.email,
            "phone": lead.phone,
            "title": lead.title,
            "company_name": lead.company,
            "status": "active",
            "source": lead.lead_source,
            "notes": f"Converted from lead. Original notes: {lead.notes}",
            "tags": [*lead.tags, "converted-lead"],
            **(overrides or {}),
        }

        contact = await self._contacts.create(data)
        if contact is None:
            return None

        with self._guard("convert_to_contact", rid):
            self._store.remove_ids({rid})

        logger.info("lead %s converted to contact %s", rid, contact.id)
        return contact
