import streamlit as st

from domain.constants import MSG_NO_SESSION
from domain.errors import CrmError
from services import auth as auth_svc
from ui.components import action_banner
from ui.navigation import link_html, navigate
from utils import page_state

FORM_KEYS = ("login_email", "login_password")


def submit(ctx, state, email: str, password: str) -> bool:
    state.update(loading=True, error=None)
    try:
        session = auth_svc.sign_in(ctx, email, password)
    except CrmError as e:
        state['error'] = e.message
        return False
    finally:
        state['loading'] = False
    if session is None:
        state['error'] = MSG_NO_SESSION
        return False
    return True


def view(ctx, route):
    state = page_state.mount(st.session_state, route.path, {'loading': False, 'error': None})

    st.header("Welcome Back")
    st.caption("Sign in to continue to Simple CRM")

    action_banner(state['error'])

    with st.form("login_form"):
        st.text_input("Email Address", placeholder="you@example.com", key="login_email")
        st.text_input("Password", type="password", placeholder="••••••••", key="login_password")
        st.form_submit_button("Signing In..." if state['loading'] else "Sign In",
                              disabled=state['loading'],
                              on_click=page_state.begin_submit, args=(st.session_state, state, FORM_KEYS))

    if state['loading']:
        values = state.pop('pending', None) or {}
        if submit(ctx, state, values.get('login_email'), values.get('login_password')):
            navigate('/')
        st.rerun()

    st.markdown(f"Don't have an account? {link_html('/signup', 'Sign up')}", unsafe_allow_html=True)
