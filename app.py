import datetime as dt
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

import streamlit as st

from services.backend import create_context
from ui.navigation import current_path, navigate
from utils import page_state
from utils.config import load_settings
from utils.log import configure_logging

# Import the page rendering functions from the view modules
from views import signup, login, dashboard, customers, add_customer, customer_details, guard

logger = logging.getLogger(__name__)

# --- Route Registry ---
# Maps a route key to its path pattern, rendering function, and whether a session is required.
ROUTES = {
    "signup": {
        "path": "/signup",
        "render_func": signup.view,
        "protected": False,
    },
    "login": {
        "path": "/login",
        "render_func": login.view,
        "protected": False,
    },
    "dashboard": {
        "path": "/dashboard",
        "render_func": dashboard.view,
        "protected": True,
    },
    "customers": {
        "path": "/customers",
        "render_func": customers.view,
        "protected": True,
    },
    "add_customer": {
        "path": "/add-customer",
        "render_func": add_customer.view,
        "protected": True,
    },
    "customer_details": {
        "path": "/customer/:id",
        "render_func": customer_details.view,
        "protected": True,
    },
}

REDIRECTS = {"/": "/dashboard"}

# Sidebar shortcuts shown once signed in
NAV_LINKS = [("Dashboard", "/dashboard"), ("Customers", "/customers"), ("Add Customer", "/add-customer")]


@dataclass
class Route:
    key: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)


def _compile(pattern: str):
    return re.compile("^" + re.sub(r":(\w+)", r"(?P<\1>[^/]+)", pattern) + "/?$")


_COMPILED = {key: _compile(entry["path"]) for key, entry in ROUTES.items()}


def resolve_redirect(path: str) -> Optional[str]:
    return REDIRECTS.get(path or "/")


def resolve_route(path: str) -> Optional[Route]:
    """Match a URL path against the registry; None when nothing matches."""
    path = path or "/"
    for key, rx in _COMPILED.items():
        m = rx.match(path)
        if m:
            return Route(key=key, path=path, params=m.groupdict())
    return None


def render_func_for(key: str):
    """The page's render function, wrapped in the session guard when the route is protected."""
    entry = ROUTES[key]
    if entry["protected"]:
        return guard.protected(entry["render_func"])
    return entry["render_func"]


def _context(settings):
    # One backend client per browser session: the client carries that user's auth session.
    if 'crm_context' not in st.session_state:
        st.session_state.crm_context = create_context(settings)
    return st.session_state.crm_context


def _sidebar(ctx):
    st.sidebar.title("Simple CRM")
    if ctx.session is not None:
        st.sidebar.caption(f"Signed in as {ctx.session.user.email or ctx.session.user.id}")
        for label, path in NAV_LINKS:
            if st.sidebar.button(label, key=f"nav_{path}"):
                navigate(path)
        guard.logout_button(ctx, key="nav_logout", container=st.sidebar)
    st.sidebar.markdown("---")
    st.sidebar.caption(
        f"{dt.datetime.now(dt.timezone.utc).strftime('%H:%M:%S')}Z"
    )


def main():
    """
    Main application router.

    Resolves the `path` query parameter to a page, applies the `/` redirect,
    mounts the page's view state and renders it behind the session guard when
    the route is protected.
    """
    settings = load_settings()
    configure_logging(settings.log_level)
    st.set_page_config(page_title="Simple CRM", layout="wide")

    missing = settings.validate()
    if missing:
        logger.error("Missing configuration: %s", ", ".join(missing))
        st.error(f"Configuration error: set {', '.join(missing)} (environment or .env file).")
        return

    ctx = _context(settings)
    path = current_path()

    target = resolve_redirect(path)
    if target:
        navigate(target)
        return

    route = resolve_route(path)
    if route is None:
        st.warning(f"Page not found: {path}")
        if st.button("Go to Dashboard"):
            navigate("/dashboard")
        return

    # Mount before rendering so a route change drops the previous page's state
    page_state.mount(st.session_state, route.path)
    render_func_for(route.key)(ctx, route)
    _sidebar(ctx)


if __name__ == "__main__":
    main()
