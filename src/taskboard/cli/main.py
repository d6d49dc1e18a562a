# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState from the seed data and logs a
dashboard summary. Nothing is written back: state lives only in memory.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..core.state import AppState
from ..crm.dashboard import crm_dashboard_stats
from ..logging_setup import setup_logging
from ..tasks.task_view import load_task_board

logger = logging.getLogger(__name__)


async def summarize(state: AppState) -> None:
    board, stats = await asyncio.gather(
        load_task_board(state.tasks, state.categories),
        crm_dashboard_stats(state.contacts, state.companies, state.deals, state.leads),
    )

    logger.info(
        "Tasks: %d open (today=%d overdue=%d), %.0f%% complete",
        board.counts["all"],
        board.counts["today"],
        board.counts["overdue"],
        board.completion_rate,
    )
    for category in board.categories:
        logger.info("  %s: %d open", category.name, board.counts.get(category.id, 0))
    for task in board.tasks[:5]:
        logger.info("  [%s] %s", task.priority.value, task.title)

    logger.info(
        "CRM: contacts=%d (active %d) companies=%d (active %d) deals=%d value=%.0f leads=%d (qualified %d)",
        stats.contacts_total,
        stats.contacts_active,
        stats.companies_total,
        stats.companies_active,
        stats.deals_total,
        stats.deals_total_value,
        stats.leads_total,
        stats.leads_qualified,
    )


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    asyncio.run(summarize(state))
    logger.info("Bye.")


if __name__ == "__main__":
    main()
