import streamlit as st

from domain.constants import DEFAULT_STATUS
from domain.errors import CrmError
from services import customers as customer_svc
from ui.components import action_banner, customer_form
from ui.navigation import navigate
from utils import page_state

FORM_PREFIX = "add_customer"


def begin(store, state) -> bool:
    """Submit on_click: check the required fields, then flag the insert as in flight."""
    if not customer_form.is_complete(customer_form.values(store, FORM_PREFIX)):
        state['form_error'] = customer_form.MSG_REQUIRED
        return False
    state['form_error'] = None
    return page_state.begin_submit(store, state, customer_form.field_keys(FORM_PREFIX))


def submit(ctx, state, form: dict) -> bool:
    """Insert the customer for the signed-in user; True once the row is stored."""
    state.update(loading=True, error=None)
    try:
        customer_svc.add_customer(
            ctx,
            name=form.get('name', ''),
            email=form.get('email', ''),
            phone=form.get('phone', ''),
            status=form.get('status') or DEFAULT_STATUS,
        )
    except CrmError as e:
        state['error'] = e.message
        return False
    finally:
        state['loading'] = False
    return True


def view(ctx, route):
    state = page_state.mount(st.session_state, route.path, {'loading': False, 'error': None, 'form_error': None})

    st.header("Add New Customer")
    st.caption("Enter the customer's details below")

    action_banner(state['error'])

    customer_form.render({'status': DEFAULT_STATUS}, key_prefix=FORM_PREFIX,
                         disabled=state['loading'], error=state['form_error'],
                         on_submit=begin, args=(st.session_state, state))
    if state['loading']:
        form = customer_form.values(state.pop('pending', None) or {}, FORM_PREFIX)
        if submit(ctx, state, form):
            navigate('/customers')
        st.rerun()

    if st.button("Cancel", key="add_customer_cancel"):
        navigate('/customers')
