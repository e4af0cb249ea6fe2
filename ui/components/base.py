import html

import streamlit as st

from domain.constants import TYPE_BADGE_COLORS, DEFAULT_BADGE_COLOR, OVERDUE, DUE_TODAY
from utils.dates import classify_due

BLUE = "#2563EB"  # blue-600
GREEN = "#059669"  # emerald-600
AMBER = "#D97706"  # amber-600
RED = "#DC2626"  # red-600
GRAY = "#64748B"  # slate-500
INDIGO = "#4F46E5"

BADGE_COLORS = {
    "blue": BLUE,
    "green": GREEN,
    "amber": AMBER,
    "red": RED,
    "gray": GRAY,
    "indigo": INDIGO,
}

DUE_BADGE_COLORS = {
    OVERDUE: "red",
    DUE_TODAY: "amber",
}


def inject_base_css():
    # Streamlit rebuilds the page each rerun, so the style block must be emitted every time.
    rules = "\n".join(
        f".badge.{name} {{background:{color};}}" for name, color in BADGE_COLORS.items()
    )
    st.markdown(
        f"""
        <style>
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:6px;
            font-size:11px; line-height:16px; font-weight:700; text-transform:uppercase;
            background:{GRAY}; color:#F9FAFB; margin-right:4px;
        }}
        {rules}
        .done {{opacity:.5; text-decoration:line-through;}}
        .crm-table {{width:100%; border-collapse:collapse;}}
        .crm-table th {{text-align:left; font-size:12px; text-transform:uppercase; color:#94A3B8; padding:8px;}}
        .crm-table td {{padding:8px; border-top:1px solid #1f2937;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def type_badge_color(interaction_type: str) -> str:
    """Call -> blue, Email -> green, Meeting -> amber, anything else -> gray."""
    return TYPE_BADGE_COLORS.get(interaction_type, DEFAULT_BADGE_COLOR)


def badge(label: str, color: str) -> str:
    return f'<span class="badge {color}">{html.escape(label or "")}</span>'


def type_badge(interaction_type: str) -> str:
    return badge(interaction_type, type_badge_color(interaction_type))


def due_badge(followup_date: str, today: str = None) -> str:
    state = classify_due(followup_date, today)
    return badge(state, DUE_BADGE_COLORS.get(state, "indigo"))


def loader(message: str = "Loading..."):
    """Placeholder shown while a page-level fetch is outstanding."""
    return st.spinner(message)


def action_banner(message):
    if message:
        st.error(message)
