"""
This package provides a collection of reusable UI components for the Streamlit application.

It is organized into several modules, each containing a specific category of components:
- `base`: CSS injection, badges, the loading indicator and the action banner.
- `cards`: Larger components for customers, interactions and follow-ups.
- `customer_form`: The new-customer form.

By importing the components here, we provide a single, consistent access point
for the rest of the application (`from ui.components import ...`).
"""

from .base import (
    inject_base_css,
    type_badge,
    type_badge_color,
    due_badge,
    loader,
    action_banner,
)

from .cards import (
    agenda_item,
    followup_table,
    customer_info_card,
    interaction_item,
    followup_item,
)

from . import customer_form
