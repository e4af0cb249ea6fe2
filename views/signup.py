import streamlit as st

from domain.constants import MSG_SIGNUP_SUCCESS, MIN_PASSWORD_LENGTH
from domain.errors import CrmError
from services import auth as auth_svc
from ui.components import action_banner
from ui.navigation import link_html
from utils import page_state

FORM_KEYS = ("signup_email", "signup_password")


def submit(ctx, state, email: str, password: str) -> bool:
    """Run the sign-up call, recording the outcome on the page state."""
    state.update(loading=True, error=None, success=False)
    try:
        auth_svc.sign_up(ctx, email, password)
    except CrmError as e:
        state['error'] = e.message
        return False
    finally:
        state['loading'] = False
    state['success'] = True
    return True


def view(ctx, route):
    state = page_state.mount(st.session_state, route.path, {'loading': False, 'error': None, 'success': False})

    st.header("Create Account")
    st.caption("Get started with Simple CRM today")

    action_banner(state['error'])
    if state['success']:
        st.success(MSG_SIGNUP_SUCCESS)

    with st.form("signup_form"):
        st.text_input("Email Address", placeholder="you@example.com", key="signup_email")
        st.text_input("Password", type="password", placeholder="••••••••",
                      help=f"At least {MIN_PASSWORD_LENGTH} characters", key="signup_password")
        st.form_submit_button("Creating Account..." if state['loading'] else "Sign Up",
                              disabled=state['loading'],
                              on_click=page_state.begin_submit, args=(st.session_state, state, FORM_KEYS))

    if state['loading']:
        values = state.pop('pending', None) or {}
        if submit(ctx, state, values.get('signup_email'), values.get('signup_password')):
            # Clear form fields for the next registration
            for k in FORM_KEYS:
                if k in st.session_state:
                    del st.session_state[k]
        st.rerun()

    st.markdown(f"Already have an account? {link_html('/login', 'Log in')}", unsafe_allow_html=True)
