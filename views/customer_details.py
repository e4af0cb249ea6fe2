import datetime as dt
import logging

import streamlit as st

from domain.constants import (
    STATUSES, INTERACTION_TYPES, DEFAULT_INTERACTION_TYPE, MSG_CUSTOMER_NOT_FOUND,
    MSG_ADD_INTERACTION_FAILED, MSG_ADD_FOLLOWUP_FAILED, MSG_COMPLETE_FOLLOWUP_FAILED,
)
from domain.errors import CrmError
from services import customers as customer_svc, interactions as interaction_svc, followups as followup_svc
from services.customer_details import load_customer_details
from ui.components import (
    action_banner, loader, inject_base_css, customer_info_card, interaction_item, followup_item,
)
from ui.navigation import navigate
from utils import page_state
from utils.dates import today_iso

logger = logging.getLogger(__name__)

INTERACTION_FORM_KEYS = ("ix_type", "ix_date", "ix_notes")
FOLLOWUP_FORM_KEYS = ("fu_action", "fu_date")


# --- Page controller -------------------------------------------------------

def load(ctx, store, state, customer_id: str):
    if 'details' in state:
        return
    token = page_state.current_token(store)
    with loader("Loading customer..."):
        details = load_customer_details(ctx, customer_id)
    page_state.update(
        store, token,
        details=details,
        customer=details.customer,
        interactions=details.interactions,
        followups=details.followups,
        action_error=" ".join(details.warnings) or None,
    )


def change_status(ctx, state, status: str) -> bool:
    customer = state['customer']
    try:
        customer_svc.update_status(ctx, customer.id, status)
    except CrmError as e:
        state['action_error'] = e.message
        return False
    state['customer'] = customer_svc.patch_status([customer], customer.id, status)[0]
    return True


def add_interaction(ctx, state, customer_id: str, interaction_type: str, notes: str, date: str) -> bool:
    """Insert an interaction and put the stored row at the top of the timeline."""
    state.update(action_error=None, submitting_interaction=True)
    try:
        if not (notes or '').strip():
            return False
        created = interaction_svc.add_interaction(ctx, customer_id, notes, interaction_type=interaction_type, date=date)
    except CrmError as e:
        logger.error("Add interaction failed: %s", e.message)
        state['action_error'] = MSG_ADD_INTERACTION_FAILED
        return False
    finally:
        state['submitting_interaction'] = False
    state['interactions'] = interaction_svc.prepend(state.get('interactions', []), created)
    return True


def add_followup(ctx, state, customer_id: str, action: str, followup_date: str) -> bool:
    state.update(action_error=None, submitting_followup=True)
    try:
        if not (action or '').strip():
            return False
        created = followup_svc.add_followup(ctx, customer_id, action, followup_date=followup_date)
    except CrmError as e:
        logger.error("Add follow-up failed: %s", e.message)
        state['action_error'] = MSG_ADD_FOLLOWUP_FAILED
        return False
    finally:
        state['submitting_followup'] = False
    state['followups'] = followup_svc.append(state.get('followups', []), created)
    return True


def complete_followup(ctx, state, followup_id: str) -> bool:
    state['action_error'] = None
    try:
        followup_svc.complete_followup(ctx, followup_id)
    except CrmError as e:
        logger.error("Complete follow-up failed: %s", e.message)
        state['action_error'] = MSG_COMPLETE_FOLLOWUP_FAILED
        return False
    state['followups'] = followup_svc.mark_completed(state.get('followups', []), followup_id)
    return True


def _reset(keys):
    for k in keys:
        if k in st.session_state:
            del st.session_state[k]


# --- Rendering -------------------------------------------------------------

def _iso(value) -> str:
    return value.isoformat() if value else today_iso()


def _interaction_panel(ctx, state, customer_id):
    st.subheader("Log Interaction")
    busy = state.get('submitting_interaction', False)
    with st.form("interaction_form"):
        c1, c2 = st.columns(2)
        c1.selectbox("Type", INTERACTION_TYPES, key="ix_type")
        c2.date_input("Date", value=dt.date.fromisoformat(today_iso()), key="ix_date")
        st.text_area("Notes", placeholder="Write clear, concise notes...", key="ix_notes")
        st.form_submit_button(
            "Saving..." if busy else "Save Interaction", disabled=busy,
            on_click=page_state.begin_submit,
            args=(st.session_state, state, INTERACTION_FORM_KEYS, 'submitting_interaction', 'pending_interaction'),
        )
    if busy:
        values = state.pop('pending_interaction', None) or {}
        if add_interaction(ctx, state, customer_id, values.get('ix_type') or DEFAULT_INTERACTION_TYPE,
                           values.get('ix_notes'), _iso(values.get('ix_date'))):
            _reset(INTERACTION_FORM_KEYS)
        st.rerun()

    interactions = state.get('interactions', [])
    t1, t2 = st.columns([3, 1])
    t1.markdown("**Timeline**")
    t2.caption(f"{len(interactions)} entries")
    if not interactions:
        st.caption("No interactions logged yet.")
    for i in interactions:
        interaction_item(i)


def _followup_panel(ctx, state, customer_id):
    st.subheader("Upcoming Follow-ups")
    busy = state.get('submitting_followup', False)
    with st.form("followup_form"):
        st.text_input("Details", placeholder="Call to check in...", key="fu_action")
        st.date_input("Date", value=dt.date.fromisoformat(today_iso()), key="fu_date")
        st.form_submit_button(
            "Saving..." if busy else "Set Follow-up", disabled=busy,
            on_click=page_state.begin_submit,
            args=(st.session_state, state, FOLLOWUP_FORM_KEYS, 'submitting_followup', 'pending_followup'),
        )
    if busy:
        values = state.pop('pending_followup', None) or {}
        if add_followup(ctx, state, customer_id, values.get('fu_action'), _iso(values.get('fu_date'))):
            _reset(FOLLOWUP_FORM_KEYS)
        st.rerun()

    followups = state.get('followups', [])
    if not followups:
        st.caption("No follow-ups scheduled.")
    for f in followups:
        followup_item(f, on_complete=lambda fid: complete_followup(ctx, state, fid))


def view(ctx, route):
    store = st.session_state
    customer_id = route.params['id']
    state = page_state.mount(store, route.path, {'action_error': None})
    load(ctx, store, state, customer_id)
    inject_base_css()

    details = state.get('details')
    if details is None:
        return
    if details.error:
        st.error(f"Error: {details.error}")
        return
    if details.not_found:
        st.warning(MSG_CUSTOMER_NOT_FOUND)
        return

    if st.button("← Back to Customers", key="details_back"):
        navigate('/customers')

    action_banner(state['action_error'])

    customer = state['customer']
    customer_info_card(customer)
    st.selectbox(
        "Status", STATUSES,
        index=STATUSES.index(customer.status) if customer.status in STATUSES else 0,
        key=f"detail_status_{customer.id}",
        on_change=lambda: change_status(ctx, state, st.session_state[f"detail_status_{customer.id}"]),
    )

    st.write("---")
    left, right = st.columns(2)
    with left:
        _interaction_panel(ctx, state, customer_id)
    with right:
        _followup_panel(ctx, state, customer_id)
