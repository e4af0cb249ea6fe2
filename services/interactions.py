import logging
from typing import List, Optional

from domain.constants import TABLES, INTERACTION_TYPES, DEFAULT_INTERACTION_TYPE
from domain.errors import ValidationError
from domain.models import Interaction, interaction_from_dict
from services.backend import CrmContext, call
from utils.dates import today_iso

logger = logging.getLogger(__name__)


def list_for_customer(ctx: CrmContext, customer_id: str) -> List[Interaction]:
    """Interactions for one customer, newest first."""
    resp = call("list interactions", lambda: ctx.table(TABLES['interactions'])
                .select("*")
                .eq("customer_id", customer_id)
                .order("date", desc=True)
                .execute())
    return [interaction_from_dict(r) for r in (resp.data or [])]


def add_interaction(ctx: CrmContext, customer_id: str, notes: str,
                    interaction_type: str = DEFAULT_INTERACTION_TYPE, date: Optional[str] = None) -> Interaction:
    """Insert an interaction and return the row as stored by the backend."""
    notes = (notes or '').strip()
    if not notes:
        raise ValidationError("Notes are required.")
    if interaction_type not in INTERACTION_TYPES:
        raise ValidationError(f"Unknown interaction type: {interaction_type}")
    row = {
        'customer_id': customer_id,
        'type': interaction_type,
        'notes': notes,
        'date': date or today_iso(),
    }
    resp = call("add interaction", lambda: ctx.table(TABLES['interactions']).insert([row]).execute())
    logger.info("%s interaction logged for customer %s", interaction_type, customer_id)
    return interaction_from_dict(resp.data[0])


def prepend(interactions: List[Interaction], new: Interaction) -> List[Interaction]:
    return [new] + list(interactions)
