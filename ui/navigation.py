"""URL-path navigation on top of Streamlit query params.

The current route lives in the `path` query parameter, so `?path=/customer/42`
deep-links into a page and plain HTML anchors can navigate.
"""
import logging
from urllib.parse import quote, unquote

import streamlit as st

logger = logging.getLogger(__name__)

PATH_PARAM = 'path'


def current_path() -> str:
    raw = st.query_params.get(PATH_PARAM)
    return unquote(raw) if isinstance(raw, str) and raw else '/'


def navigate(path: str):
    """Switch route and rerun; the previous page's state is dropped on mount."""
    logger.debug("Navigate -> %s", path)
    st.query_params[PATH_PARAM] = path
    st.rerun()


def href(path: str) -> str:
    return f"?{PATH_PARAM}={quote(path)}"


def link_html(path: str, label: str) -> str:
    return f'<a href="{href(path)}" target="_self" class="nav-link">{label}</a>'
