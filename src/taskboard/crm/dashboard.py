# src/taskboard/crm/dashboard.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from ..core.ports import RecordReader
from ..records.models import round_half_up
from .crm_models import Company, Contact, Deal, Lead


@dataclass(frozen=True, slots=True)
class CrmStats:
    contacts_total: int
    contacts_active: int
    companies_total: int
    companies_active: int
    deals_total: int
    deals_total_value: float
    deals_avg_value: int
    leads_total: int
    leads_qualified: int
    leads_avg_score: int


async def crm_dashboard_stats(
    contacts: RecordReader[Contact],
    companies: RecordReader[Company],
    deals: RecordReader[Deal],
    leads: RecordReader[Lead],
) -> CrmStats:
    """Headline numbers for the CRM overview, fetched concurrently."""
    all_contacts, all_companies, all_deals, all_leads = await asyncio.gather(
        contacts.get_all(),
        companies.get_all(),
        deals.get_all(),
        leads.get_all(),
    )

    deal_value = sum(d.value for d in all_deals)
    return CrmStats(
        contacts_total=len(all_contacts),
        contacts_active=sum(1 for c in all_contacts if c.status == "active"),
        companies_total=len(all_companies),
        companies_active=sum(1 for c in all_companies if c.status == "active"),
        deals_total=len(all_deals),
        deals_total_value=deal_value,
        deals_avg_value=round_half_up(deal_value / len(all_deals)) if all_deals else 0,
        leads_total=len(all_leads),
        leads_qualified=sum(1 for lead in all_leads if lead.status == "qualified"),
        leads_avg_score=round_half_up(sum(lead.score for lead in all_leads) / len(all_leads)) if all_leads else 0,
    )
