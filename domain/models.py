from dataclasses import dataclass, field
from typing import Dict, Optional, Any


@dataclass
class Customer:
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    status: str = 'New'  # New | Contacted | Interested | Closed
    created_at: Optional[str] = None
    user_id: Optional[str] = None


@dataclass
class Interaction:
    id: str
    customer_id: str
    type: str  # Note | Call | Email | Meeting
    notes: str
    date: str  # YYYY-MM-DD


@dataclass
class Followup:
    id: str
    customer_id: str
    followup_date: str  # YYYY-MM-DD
    action: str
    completed: bool = False
    # Only populated by reads that join the customers table
    customer_name: Optional[str] = None


@dataclass
class AuthUser:
    id: str
    email: Optional[str] = None


@dataclass
class AuthSession:
    user: AuthUser
    access_token: Optional[str] = None


@dataclass
class DashboardData:
    total_customers: int = 0
    open_followups: int = 0
    today_followups_count: int = 0
    today_tasks: list = field(default_factory=list)
    upcoming_tasks: list = field(default_factory=list)
    # task name -> error message, one entry per failed read
    errors: Dict[str, str] = field(default_factory=dict)


def _filter(d: Dict[str, Any], allowed: set) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if k in allowed}


def customer_from_dict(d: Dict[str, Any]) -> Customer:
    """Build a Customer from a backend row, dropping columns the app does not use."""
    allowed = {"id", "name", "email", "phone", "status", "created_at", "user_id"}
    return Customer(**_filter(d, allowed))


def interaction_from_dict(d: Dict[str, Any]) -> Interaction:
    allowed = {"id", "customer_id", "type", "notes", "date"}
    return Interaction(**_filter(d, allowed))


def followup_from_dict(d: Dict[str, Any]) -> Followup:
    """Build a Followup; a joined `customers` object is flattened to customer_name."""
    allowed = {"id", "customer_id", "followup_date", "action", "completed"}
    filtered = _filter(d, allowed)
    filtered['completed'] = bool(filtered.get('completed', False))
    joined = d.get('customers')
    if isinstance(joined, dict):
        filtered['customer_name'] = joined.get('name')
    return Followup(**filtered)
