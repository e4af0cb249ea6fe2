import streamlit as st
from typing import Dict, Any, Mapping, Optional, Tuple
from domain.constants import STATUSES, DEFAULT_STATUS

FIELDS = ('name', 'email', 'phone', 'status')
MSG_REQUIRED = "Name and email are required."


def field_keys(key_prefix: str) -> Tuple[str, ...]:
    return tuple(f"{key_prefix}_{f}" for f in FIELDS)


def values(store: Mapping[str, Any], key_prefix: str) -> Dict[str, Any]:
    """Read the form fields back out of a widget-state mapping."""
    return {f: store.get(f"{key_prefix}_{f}") or '' for f in FIELDS}


def is_complete(form: Mapping[str, Any]) -> bool:
    return bool((form.get('name') or '').strip() and (form.get('email') or '').strip())


def render(customer_data: Dict[str, Any], key_prefix: str, disabled: bool = False,
           error: Optional[str] = None, on_submit=None, args: tuple = ()):
    """
    Renders the new-customer form.

    Args:
        customer_data (Dict[str, Any]): Values to populate the form with.
        key_prefix (str): A unique prefix for Streamlit widget keys.
        disabled (bool): Disable the submit button while an insert is pending.
        error (str): Validation message shown inside the form.
        on_submit: on_click callback of the submit button, called with `args`.
    """
    with st.form(f"form_{key_prefix}"):
        st.text_input("Full Name", value=customer_data.get('name', ''),
                      placeholder="John Doe", key=f"{key_prefix}_name")
        st.text_input("Email Address", value=customer_data.get('email', ''),
                      placeholder="john@example.com", key=f"{key_prefix}_email")
        st.text_input("Phone Number", value=customer_data.get('phone', ''),
                      placeholder="+1 (555) 000-0000", key=f"{key_prefix}_phone")

        status_value = customer_data.get('status', DEFAULT_STATUS)
        status_idx = STATUSES.index(status_value) if status_value in STATUSES else 0
        st.selectbox("Status", STATUSES, index=status_idx, key=f"{key_prefix}_status")

        if error:
            st.error(error)

        st.form_submit_button("Adding..." if disabled else "Add Customer", disabled=disabled,
                              on_click=on_submit, args=args)
