import streamlit as st

from domain.constants import MSG_DASHBOARD_FAILED
from services import dashboard as dashboard_svc
from ui.components import agenda_item, followup_table, loader
from ui.navigation import navigate
from utils import page_state
from utils.dates import today_iso
from views.guard import logout_button


def load(ctx, store, state):
    """Fetch the dashboard once per mount; a result for an unmounted page is dropped."""
    if 'data' in state:
        return
    token = page_state.current_token(store)
    today = today_iso()
    with loader("Loading dashboard..."):
        data = dashboard_svc.load_dashboard(ctx, today)
    page_state.update(store, token, data=data, today=today)


def view(ctx, route):
    store = st.session_state
    state = page_state.mount(store, route.path)
    load(ctx, store, state)

    # --- Header ---
    h1, h2, h3 = st.columns([6, 1, 1])
    h1.title("Dashboard")
    if h2.button("Customers", key="dash_customers"):
        navigate('/customers')
    logout_button(ctx, key="dash_logout", container=h3)

    data = state.get('data')
    if data is None:
        return
    if data.errors:
        st.error(MSG_DASHBOARD_FAILED)
        return

    # --- Summary cards ---
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Customers", data.total_customers)
    if c1.button("View all customers", key="dash_total_card"):
        navigate('/customers')
    c2.metric("Open Follow-ups", data.open_followups)
    c3.metric("Due Today", data.today_followups_count)

    st.write("---")
    st.subheader("Today's Agenda")
    if data.today_tasks:
        for task in data.today_tasks:
            agenda_item(task)
    else:
        st.caption("No follow-ups due today. Great job!")

    st.write("---")
    st.subheader("Upcoming Follow-ups")
    followup_table(data.upcoming_tasks, state.get('today'))
