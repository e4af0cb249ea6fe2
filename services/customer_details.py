"""Loading for the customer detail page: the customer, its timeline and its follow-ups."""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from domain.constants import MSG_LOAD_INTERACTIONS_FAILED, MSG_LOAD_FOLLOWUPS_FAILED
from domain.models import Customer, Interaction, Followup
from services import customers as customer_svc, interactions as interaction_svc, followups as followup_svc
from services.backend import CrmContext, run_parallel

logger = logging.getLogger(__name__)


@dataclass
class CustomerDetails:
    customer: Optional[Customer] = None
    interactions: List[Interaction] = field(default_factory=list)
    followups: List[Followup] = field(default_factory=list)
    # Set when the customer lookup itself failed; the page cannot render
    error: Optional[str] = None
    # Messages for the secondary lists that failed to load
    warnings: List[str] = field(default_factory=list)

    @property
    def not_found(self) -> bool:
        return self.error is None and self.customer is None


def load_customer_details(ctx: CrmContext, customer_id: str) -> CustomerDetails:
    results, errors = run_parallel({
        'customer': lambda: customer_svc.get_customer(ctx, customer_id),
        'interactions': lambda: interaction_svc.list_for_customer(ctx, customer_id),
        'followups': lambda: followup_svc.list_for_customer(ctx, customer_id),
    })
    details = CustomerDetails(
        customer=results.get('customer'),
        interactions=results.get('interactions') or [],
        followups=results.get('followups') or [],
        error=errors.get('customer'),
    )
    secondary: Dict[str, str] = {
        'interactions': MSG_LOAD_INTERACTIONS_FAILED,
        'followups': MSG_LOAD_FOLLOWUPS_FAILED,
    }
    for name, message in secondary.items():
        if name in errors:
            logger.error("Fetch %s for customer %s failed: %s", name, customer_id, errors[name])
            details.warnings.append(message)
    return details
