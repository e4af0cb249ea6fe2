"""Remote data client: the hosted Supabase backend and the session context.

All auth and table calls go through `call`, which turns the client's own
exception types into `BackendError` carrying the backend's message.
"""
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import httpx
from postgrest.exceptions import APIError
from supabase import AuthError, Client, create_client

from domain.errors import BackendError
from domain.models import AuthSession
from utils.config import Settings

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (AuthError, APIError, httpx.HTTPError)


@dataclass
class CrmContext:
    """Explicit replacement for the client's ambient session.

    One per browser session: holds the backend handle and the session last
    observed by the route guard or the login page.
    """
    client: Any
    session: Optional[AuthSession] = None

    def table(self, name: str):
        return self.client.table(name)

    @property
    def auth(self):
        return self.client.auth


def create_context(settings: Settings) -> CrmContext:
    client: Client = create_client(settings.supabase_url, settings.supabase_key)
    logger.info("Supabase client created for %s", settings.supabase_url)
    return CrmContext(client=client)


def _message(exc: Exception) -> str:
    msg = getattr(exc, 'message', None)
    return msg if isinstance(msg, str) and msg else str(exc)


def call(description: str, fn: Callable[[], Any]) -> Any:
    """Run one remote call, re-raising client failures as BackendError."""
    try:
        return fn()
    except REMOTE_ERRORS as exc:
        logger.error("%s failed: %s", description, _message(exc))
        raise BackendError(_message(exc)) from exc


def run_parallel(tasks: Dict[str, Callable[[], Any]]) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """Run independent reads concurrently and join them.

    Returns (results, errors): each task lands in exactly one of the two,
    keyed by its name. Only BackendError is captured; anything else is a bug
    and propagates.
    """
    results: Dict[str, Any] = {}
    errors: Dict[str, str] = {}
    if not tasks:
        return results, errors
    with ThreadPoolExecutor(max_workers=len(tasks)) as pool:
        futures = {name: pool.submit(fn) for name, fn in tasks.items()}
        for name, fut in futures.items():
            try:
                results[name] = fut.result()
            except BackendError as e:
                errors[name] = e.message
    return results, errors
