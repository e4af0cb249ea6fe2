import logging

import streamlit as st

from domain.constants import STATUSES, MSG_STATUS_UPDATE_FAILED
from domain.errors import CrmError
from services import customers as customer_svc
from ui.components import action_banner, loader
from ui.navigation import navigate
from utils import page_state
from views.guard import logout_button

logger = logging.getLogger(__name__)


def load(ctx, store, state):
    if 'customers' in state or state.get('load_error'):
        return
    token = page_state.current_token(store)
    try:
        page_state.update(store, token, customers=customer_svc.list_customers(ctx))
    except CrmError as e:
        page_state.update(store, token, load_error=e.message)


def change_status(ctx, state, customer_id: str, status: str) -> bool:
    """Persist a status change, then patch the local list with it.

    A failure leaves the list untouched and sets the banner; nothing is rolled back.
    """
    try:
        customer_svc.update_status(ctx, customer_id, status)
    except CrmError as e:
        logger.error("Error updating status: %s", e.message)
        state['error'] = MSG_STATUS_UPDATE_FAILED
        return False
    state['customers'] = customer_svc.patch_status(state.get('customers', []), customer_id, status)
    return True


def _on_status_change(ctx, state, customer_id, widget_key):
    change_status(ctx, state, customer_id, st.session_state[widget_key])


def view(ctx, route):
    state = page_state.mount(st.session_state, route.path, {'error': None})

    # --- Header ---
    h1, h2, h3, h4 = st.columns([5, 1, 1, 1])
    h1.title("Customers")
    if h2.button("Dashboard", key="cust_dashboard"):
        navigate('/dashboard')
    if h3.button("Add Customer", key="cust_add", type="primary"):
        navigate('/add-customer')
    logout_button(ctx, key="cust_logout", container=h4)

    query = st.text_input("Search", placeholder="Search by name or email...",
                          key="customers_search", label_visibility="collapsed")

    action_banner(state['error'])

    with loader("Loading customers..."):
        load(ctx, st.session_state, state)
    if state.get('load_error'):
        st.error(state['load_error'])
        return

    customers = state['customers']
    filtered = customer_svc.filter_customers(customers, query)
    empty = customer_svc.empty_message(customers, filtered)
    if empty:
        st.info(empty)
        return

    widths = [3, 4, 2, 1]
    head = st.columns(widths)
    for col, label in zip(head, ["Name", "Email", "Status", "Action"]):
        col.caption(label.upper())

    for c in filtered:
        row = st.columns(widths)
        row[0].write(f"**{c.name}**")
        row[1].write(c.email)
        widget_key = f"status_{c.id}"
        row[2].selectbox(
            "Status", STATUSES,
            index=STATUSES.index(c.status) if c.status in STATUSES else 0,
            key=widget_key, label_visibility="collapsed",
            on_change=_on_status_change, args=(ctx, state, c.id, widget_key),
        )
        if row[3].button("View", key=f"view_{c.id}"):
            navigate(f"/customer/{c.id}")
