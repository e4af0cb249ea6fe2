import logging
from dataclasses import replace
from typing import List, Optional

from domain.constants import TABLES
from domain.errors import ValidationError
from domain.models import Followup, followup_from_dict
from services.backend import CrmContext, call
from utils.dates import today_iso

logger = logging.getLogger(__name__)

# Follow-up columns plus the owning customer's name
JOINED_COLUMNS = "*, customers(name)"


def list_for_customer(ctx: CrmContext, customer_id: str) -> List[Followup]:
    """Follow-ups for one customer, soonest first."""
    resp = call("list follow-ups", lambda: ctx.table(TABLES['followups'])
                .select("*")
                .eq("customer_id", customer_id)
                .order("followup_date", desc=False)
                .execute())
    return [followup_from_dict(r) for r in (resp.data or [])]


def count_open(ctx: CrmContext) -> int:
    resp = call("count open follow-ups", lambda: ctx.table(TABLES['followups'])
                .select("*", count="exact", head=True)
                .eq("completed", False)
                .execute())
    return resp.count or 0


def list_open_on(ctx: CrmContext, day: str) -> List[Followup]:
    """Open follow-ups due on `day`, with customer names."""
    resp = call("list follow-ups due today", lambda: ctx.table(TABLES['followups'])
                .select(JOINED_COLUMNS)
                .eq("followup_date", day)
                .eq("completed", False)
                .execute())
    return [followup_from_dict(r) for r in (resp.data or [])]


def list_open(ctx: CrmContext) -> List[Followup]:
    """Every open follow-up ordered by date, with customer names."""
    resp = call("list open follow-ups", lambda: ctx.table(TABLES['followups'])
                .select(JOINED_COLUMNS)
                .eq("completed", False)
                .order("followup_date", desc=False)
                .execute())
    return [followup_from_dict(r) for r in (resp.data or [])]


def add_followup(ctx: CrmContext, customer_id: str, action: str, followup_date: Optional[str] = None) -> Followup:
    action = (action or '').strip()
    if not action:
        raise ValidationError("Follow-up details are required.")
    row = {
        'customer_id': customer_id,
        'followup_date': followup_date or today_iso(),
        'action': action,
    }
    resp = call("add follow-up", lambda: ctx.table(TABLES['followups']).insert([row]).execute())
    logger.info("Follow-up scheduled for customer %s on %s", customer_id, row['followup_date'])
    return followup_from_dict(resp.data[0])


def complete_followup(ctx: CrmContext, followup_id: str):
    """Mark a follow-up done. There is no way back to open."""
    call("complete follow-up", lambda: ctx.table(TABLES['followups'])
         .update({'completed': True})
         .eq("id", followup_id)
         .execute())
    logger.info("Follow-up %s completed", followup_id)


def append(followups: List[Followup], new: Followup) -> List[Followup]:
    return list(followups) + [new]


def mark_completed(followups: List[Followup], followup_id: str) -> List[Followup]:
    return [replace(f, completed=True) if f.id == followup_id else f for f in followups]
