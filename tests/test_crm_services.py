# tests/test_crm_services.py

from __future__ import annotations

import pytest

from taskboard.crm.crm_models import DealStage
from taskboard.crm.crm_services import CompanyService, ContactService, DealService, LeadService
from taskboard.crm.dashboard import crm_dashboard_stats
from taskboard.records.models import round_half_up

from .fakes import FakeClock


@pytest.mark.asyncio
async def test_contact_lookups(contact_service: ContactService) -> None:
    await contact_service.create({"first_name": "a", "company_id": 1})
    await contact_service.create({"first_name": "b", "company_id": "2", "status": "inactive"})
    await contact_service.create({"first_name": "c", "company_id": 1})

    assert [c.first_name for c in await contact_service.get_by_company(1)] == ["a", "c"]
    assert [c.first_name for c in await contact_service.get_by_company("2")] == ["b"]
    assert await contact_service.get_by_company("nope") == []
    assert [c.first_name for c in await contact_service.get_by_status("inactive")] == ["b"]


@pytest.mark.asyncio
async def test_contact_full_name(contact_service: ContactService) -> None:
    contact = await contact_service.create({"first_name": "Ada", "last_name": "Lovelace"})
    assert contact.full_name == "Ada Lovelace"


@pytest.mark.asyncio
async def test_company_lookups(company_service: CompanyService) -> None:
    await company_service.create({"name": "Big", "tier": "enterprise", "industry": "Tech"})
    await company_service.create({"name": "Small", "industry": "Retail", "status": "inactive"})

    assert [c.name for c in await company_service.get_by_tier("enterprise")] == ["Big"]
    assert [c.name for c in await company_service.get_by_tier("small")] == ["Small"]
    assert [c.name for c in await company_service.get_by_industry("Retail")] == ["Small"]
    assert [c.name for c in await company_service.get_active_companies()] == ["Big"]


@pytest.mark.asyncio
async def test_company_numbers_are_coerced(company_service: CompanyService) -> None:
    company = await company_service.create({"name": "Acme", "revenue": "2500000", "employees": 40})
    assert company.revenue == 2500000
    assert company.employees == 40


@pytest.mark.asyncio
async def test_new_deal_starts_without_activities(deal_service: DealService) -> None:
    deal = await deal_service.create(
        {
            "name": "Pilot",
            "value": "1200.50",
            "stage": "Proposal",
            "activities": [{"type": "call", "description": "should not survive"}],
        }
    )
    assert deal.stage is DealStage.PROPOSAL
    assert deal.value == pytest.approx(1200.5)
    assert deal.activities == []


@pytest.mark.asyncio
async def test_deal_lookups(deal_service: DealService) -> None:
    await deal_service.create({"name": "a", "stage": "demo", "owner": "Rep A", "company_id": 7})
    await deal_service.create({"name": "b", "stage": "closed-won", "owner": "Rep B", "company_id": 7})
    await deal_service.create({"name": "c", "stage": "bogus", "owner": "Rep A"})

    assert [d.name for d in await deal_service.get_by_stage("demo")] == ["a"]
    assert [d.name for d in await deal_service.get_by_stage("discovery")] == ["c"]
    assert [d.name for d in await deal_service.get_by_owner("Rep A")] == ["a", "c"]
    assert [d.name for d in await deal_service.get_by_company(7)] == ["a", "b"]


@pytest.mark.asyncio
async def test_add_activity_appends_dated_entry(deal_service: DealService, clock: FakeClock) -> None:
    deal = await deal_service.create({"name": "Deal"})
    when = clock.tick()

    assert await deal_service.add_activity(deal.id, {"type": "call", "description": "intro"}) is True
    assert await deal_service.add_activity(deal.id, {"description": "follow-up"}) is True
    assert await deal_service.add_activity(999, {"type": "call"}) is False

    stored = await deal_service.get_by_id(deal.id)
    assert [(a.type, a.description, a.outcome) for a in stored.activities] == [
        ("call", "intro", "pending"),
        ("note", "follow-up", "pending"),
    ]
    assert stored.activities[0].date == when
    assert stored.updated_at == when


@pytest.mark.asyncio
async def test_pipeline_groups_every_stage(deal_service: DealService) -> None:
    await deal_service.create({"name": "a", "stage": "proposal", "value": 100})
    await deal_service.create({"name": "b", "stage": "proposal", "value": 300})
    await deal_service.create({"name": "c", "stage": "closed-won", "value": 50})

    pipeline = await deal_service.get_pipeline_data()

    assert list(pipeline) == list(DealStage)
    proposal = pipeline[DealStage.PROPOSAL]
    assert proposal.count == 2
    assert proposal.total_value == pytest.approx(400)
    assert proposal.avg_value == pytest.approx(200)
    assert pipeline[DealStage.NEGOTIATION].count == 0
    assert pipeline[DealStage.NEGOTIATION].avg_value == 0.0


@pytest.mark.asyncio
async def test_lead_lookups_and_stats(lead_service: LeadService) -> None:
    await lead_service.create({"first_name": "a", "status": "qualified", "score": 80, "budget": 1000})
    await lead_service.create(
        {"first_name": "b", "lead_source": "event", "score": 41, "budget": 500, "assigned_to": "Rep 2"}
    )
    await lead_service.create({"first_name": "c", "status": "lost", "score": 0})

    assert [x.first_name for x in await lead_service.get_by_status("qualified")] == ["a"]
    assert [x.first_name for x in await lead_service.get_by_source("event")] == ["b"]
    assert [x.first_name for x in await lead_service.get_by_assignee("Sales Rep 1")] == ["a", "c"]

    stats = await lead_service.get_lead_stats()
    assert stats.total == 3
    assert stats.by_status == {"new": 1, "contacted": 0, "qualified": 1, "nurturing": 0}
    assert stats.avg_score == 40
    assert stats.total_budget == 1500


@pytest.mark.asyncio
async def test_update_score(lead_service: LeadService) -> None:
    lead = await lead_service.create({"first_name": "a", "score": 10})

    assert await lead_service.update_score(lead.id, "65") is True
    assert (await lead_service.get_by_id(lead.id)).score == 65
    assert await lead_service.update_score(404, 10) is False


@pytest.mark.asyncio
async def test_convert_lead_to_contact(lead_service: LeadService, contact_service: ContactService) -> None:
    lead = await lead_service.create(
        {
            "first_name": "Olivia",
            "last_name": "Park",
            "email": "olivia@example.com",
            "company": "Northwind",
            "lead_source": "website",
            "notes": "Asked for a demo",
            "tags": ["hot"],
        }
    )

    contact = await lead_service.convert_to_contact(lead.id, {"title": "CTO"})

    assert contact is not None
    assert contact.full_name == "Olivia Park"
    assert contact.company_name == "Northwind"
    assert contact.source == "website"
    assert contact.status == "active"
    assert contact.title == "CTO"
    assert contact.notes == "Converted from lead. Original notes: Asked for a demo"
    assert contact.tags == ["hot", "converted-lead"]

    assert await lead_service.get_by_id(lead.id) is None
    assert [c.id for c in await contact_service.get_all()] == [contact.id]


@pytest.mark.asyncio
async def test_convert_unknown_lead(lead_service: LeadService, contact_service: ContactService) -> None:
    assert await lead_service.convert_to_contact(12345) is None
    assert await contact_service.get_all() == []


@pytest.mark.asyncio
async def test_dashboard_stats(
    contact_service: ContactService,
    company_service: CompanyService,
    deal_service: DealService,
    lead_service: LeadService,
) -> None:
    await contact_service.create({"first_name": "a"})
    await contact_service.create({"first_name": "b", "status": "inactive"})
    await company_service.create({"name": "Acme"})
    await deal_service.create({"name": "x", "value": 100})
    await deal_service.create({"name": "y", "value": 201})
    await lead_service.create({"first_name": "l", "status": "qualified", "score": 70})

    stats = await crm_dashboard_stats(contact_service, company_service, deal_service, lead_service)

    assert (stats.contacts_total, stats.contacts_active) == (2, 1)
    assert (stats.companies_total, stats.companies_active) == (1, 1)
    assert stats.deals_total == 2
    assert stats.deals_total_value == pytest.approx(301)
    assert stats.deals_avg_value == 151
    assert (stats.leads_total, stats.leads_qualified, stats.leads_avg_score) == (1, 1, 70)


@pytest.mark.asyncio
async def test_dashboard_stats_on_empty_stores(
    contact_service: ContactService,
    company_service: CompanyService,
    deal_service: DealService,
    lead_service: LeadService,
) -> None:
    stats = await crm_dashboard_stats(contact_service, company_service, deal_service, lead_service)
    assert stats.deals_avg_value == 0
    assert stats.leads_avg_score == 0


@pytest.mark.asyncio
async def test_averages_round_halves_up(
    contact_service: ContactService,
    company_service: CompanyService,
    deal_service: DealService,
    lead_service: LeadService,
) -> None:
    await lead_service.create({"first_name": "a", "score": 2})
    await lead_service.create({"first_name": "b", "score": 3})
    await deal_service.create({"name": "x", "value": 2})
    await deal_service.create({"name": "y", "value": 3})

    assert (await lead_service.get_lead_stats()).avg_score == 3

    stats = await crm_dashboard_stats(contact_service, company_service, deal_service, lead_service)
    assert stats.leads_avg_score == 3
    assert stats.deals_avg_value == 3


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2
    assert round_half_up(40.33) == 40
