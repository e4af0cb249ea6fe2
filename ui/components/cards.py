import html
from typing import List, Optional

import pandas as pd
import streamlit as st

from domain.models import Customer, Interaction, Followup
from ui.navigation import link_html
from utils.dates import format_short, format_long
from .base import inject_base_css, due_badge, type_badge


def customer_path(customer_id: str) -> str:
    return f"/customer/{customer_id}"


def agenda_item(task: Followup):
    """One highlighted row of today's agenda."""
    with st.container(border=True):
        c1, c2 = st.columns([5, 1])
        c1.markdown(f"**{task.action or ''}**")
        c1.caption(f"Customer: {task.customer_name or 'Unknown'}")
        c2.markdown(link_html(customer_path(task.customer_id), "View"), unsafe_allow_html=True)


def followup_frame(tasks: List[Followup], today: Optional[str] = None) -> pd.DataFrame:
    """Open follow-ups as a display table; Status and View cells hold HTML."""
    rows = [{
        "Status": due_badge(t.followup_date, today),
        "Date": format_short(t.followup_date),
        "Customer": html.escape(t.customer_name or ''),
        "Action": html.escape(t.action or ''),
        "": link_html(customer_path(t.customer_id), "View"),
    } for t in tasks]
    return pd.DataFrame(rows, columns=["Status", "Date", "Customer", "Action", ""])


def followup_table(tasks: List[Followup], today: Optional[str] = None):
    inject_base_css()
    if not tasks:
        st.caption("No upcoming follow-ups found.")
        st.caption("Schedule tasks in customer details to see them here.")
        return
    df = followup_frame(tasks, today)
    st.write(df.to_html(escape=False, index=False, classes="crm-table", border=0), unsafe_allow_html=True)


def customer_info_card(customer: Customer):
    """Read-only customer facts; the status selector is rendered by the page."""
    st.markdown(f"## {customer.name or ''}")
    st.caption(f"ID: {(customer.id or '')[:8]}")
    c1, c2, c3 = st.columns(3)
    c1.markdown(f"**Email**  \n{customer.email or ''}")
    c2.markdown(f"**Phone**  \n{customer.phone or 'N/A'}")
    c3.markdown(f"**Member Since**  \n{format_long(customer.created_at or '')}")


def interaction_item(interaction: Interaction):
    with st.container(border=True):
        st.markdown(
            f"{type_badge(interaction.type)} <small>{format_long(interaction.date)}</small>",
            unsafe_allow_html=True,
        )
        st.write(interaction.notes)


def followup_item(followup: Followup, on_complete=None, key_prefix: str = "fu"):
    """A follow-up row; completed ones are struck through and lose the Mark Done control."""
    with st.container(border=True):
        c1, c2 = st.columns([4, 1])
        cls = ' class="done"' if followup.completed else ''
        c1.markdown(f"<span{cls}>{html.escape(followup.action or '')}</span>", unsafe_allow_html=True)
        c1.caption(f"Due: {format_short(followup.followup_date)}")
        if not followup.completed and on_complete is not None:
            c2.button("Mark Done", key=f"{key_prefix}_done_{followup.id}",
                      on_click=on_complete, args=(followup.id,))
