"""Session gate for protected pages, plus the shared logout action."""
import functools
import logging

import streamlit as st

from domain.errors import CrmError
from services import auth as auth_svc
from services.backend import CrmContext
from ui.components import loader
from ui.navigation import navigate

logger = logging.getLogger(__name__)

LOGIN_PATH = '/login'


def has_session(ctx: CrmContext) -> bool:
    """Ask the backend whether the context still holds an active session."""
    try:
        return auth_svc.current_session(ctx) is not None
    except CrmError as e:
        logger.error("Session check failed, treating as signed out: %s", e.message)
        ctx.session = None
        return False


def protected(render_func):
    """Wrap a page view so it only renders for a signed-in context."""
    @functools.wraps(render_func)
    def wrapper(ctx: CrmContext, route):
        with loader("Checking session..."):
            ok = has_session(ctx)
        if not ok:
            navigate(LOGIN_PATH)
            return
        render_func(ctx, route)
    return wrapper


def logout(ctx: CrmContext):
    try:
        auth_svc.sign_out(ctx)
    except CrmError as e:
        # The local session is dropped either way
        logger.error("Sign out failed: %s", e.message)
        ctx.session = None
    navigate(LOGIN_PATH)


def logout_button(ctx: CrmContext, key: str, container=None):
    target = container if container is not None else st
    if target.button("Logout", key=key):
        logout(ctx)
