"""Customer service: list, search, create and status updates for the customers table."""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import List, Optional

from domain.constants import TABLES, STATUSES, DEFAULT_STATUS, MSG_NO_CUSTOMERS, MSG_NO_MATCHES
from domain.errors import ValidationError
from domain.models import Customer, customer_from_dict
from services import auth
from services.backend import CrmContext, call

logger = logging.getLogger(__name__)


def list_customers(ctx: CrmContext) -> List[Customer]:
    """All customers, newest first."""
    resp = call("list customers", lambda: ctx.table(TABLES['customers'])
                .select("*")
                .order("created_at", desc=True)
                .execute())
    return [customer_from_dict(r) for r in (resp.data or [])]


def get_customer(ctx: CrmContext, customer_id: str) -> Optional[Customer]:
    resp = call("get customer", lambda: ctx.table(TABLES['customers'])
                .select("*")
                .eq("id", customer_id)
                .maybe_single()
                .execute())
    # maybe_single yields no response at all for a missing row on some client versions
    if resp is None or not resp.data:
        return None
    return customer_from_dict(resp.data)


def count_customers(ctx: CrmContext) -> int:
    resp = call("count customers", lambda: ctx.table(TABLES['customers'])
                .select("*", count="exact", head=True)
                .execute())
    return resp.count or 0


def filter_customers(customers: List[Customer], query: str) -> List[Customer]:
    """Case-insensitive substring match on name OR email."""
    q = (query or '').lower()
    if not q:
        return list(customers)
    return [c for c in customers
            if q in (c.name or '').lower() or q in (c.email or '').lower()]


def empty_message(customers: List[Customer], filtered: List[Customer]) -> Optional[str]:
    if filtered:
        return None
    return MSG_NO_CUSTOMERS if not customers else MSG_NO_MATCHES


def _check_status(status: str):
    if status not in STATUSES:
        raise ValidationError(f"Unknown status: {status}")


def add_customer(ctx: CrmContext, name: str, email: str, phone: str = '', status: str = DEFAULT_STATUS) -> Customer:
    """Insert a customer owned by the signed-in user.

    String fields are trimmed; name and email are required.
    Raises NotAuthenticatedError when no user is signed in.
    """
    name = (name or '').strip()
    email = (email or '').strip()
    phone = (phone or '').strip()
    if not name or not email:
        raise ValidationError("Name and email are required.")
    _check_status(status)

    user = auth.require_user(ctx)
    row = {
        'name': name,
        'email': email,
        'phone': phone,
        'status': status,
        'user_id': user.id,
    }
    resp = call("add customer", lambda: ctx.table(TABLES['customers']).insert([row]).execute())
    logger.info("Customer %s added by %s", email, user.id)
    data = resp.data or []
    if data:
        return customer_from_dict(data[0])
    return Customer(id='', **row)


def update_status(ctx: CrmContext, customer_id: str, status: str):
    _check_status(status)
    call("update customer status", lambda: ctx.table(TABLES['customers'])
         .update({'status': status})
         .eq("id", customer_id)
         .execute())
    logger.info("Customer %s status -> %s", customer_id, status)


def patch_status(customers: List[Customer], customer_id: str, status: str) -> List[Customer]:
    """Local copy of the list with only the matching customer's status changed."""
    return [replace(c, status=status) if c.id == customer_id else c for c in customers]
