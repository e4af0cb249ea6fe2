"""
This service module gathers the dashboard aggregates. The four reads are
independent, so they run concurrently and each failure is recorded on its own;
the view decides how to present a partial result.
"""
import logging
from typing import Optional

from domain.models import DashboardData
from services import customers as customer_svc, followups as followup_svc
from services.backend import CrmContext, run_parallel
from utils.dates import today_iso

logger = logging.getLogger(__name__)


def load_dashboard(ctx: CrmContext, today: Optional[str] = None) -> DashboardData:
    """Counters plus today's agenda and the open follow-up table."""
    today = today or today_iso()
    results, errors = run_parallel({
        'total_customers': lambda: customer_svc.count_customers(ctx),
        'open_followups': lambda: followup_svc.count_open(ctx),
        'today_tasks': lambda: followup_svc.list_open_on(ctx, today),
        'upcoming_tasks': lambda: followup_svc.list_open(ctx),
    })
    for name, message in errors.items():
        logger.error("Dashboard read '%s' failed: %s", name, message)

    today_tasks = results.get('today_tasks') or []
    return DashboardData(
        total_customers=results.get('total_customers') or 0,
        open_followups=results.get('open_followups') or 0,
        today_followups_count=len(today_tasks),
        today_tasks=today_tasks,
        upcoming_tasks=results.get('upcoming_tasks') or [],
        errors=errors,
    )
