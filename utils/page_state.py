"""Per-route view state kept in a session mapping (normally st.session_state).

A page "mounts" when the router renders a route different from the last one
rendered; mounting discards the previous page's state. Each mount gets a fresh
token, and `update` drops writes carrying a stale token so that results of a
fetch started by a page that has since been left never leak into the next one.
"""
from typing import Any, Dict, MutableMapping, Optional

_ROUTE_KEY = '_mounted_route'
_TOKEN_KEY = '_mount_token'
_STATE_KEY = '_page_state'


def mount(store: MutableMapping[str, Any], route: str, defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the state dict for `route`, resetting it if another route was mounted."""
    if store.get(_ROUTE_KEY) != route or _STATE_KEY not in store:
        store[_ROUTE_KEY] = route
        store[_TOKEN_KEY] = store.get(_TOKEN_KEY, 0) + 1
        store[_STATE_KEY] = {}
    state = store[_STATE_KEY]
    for k, v in (defaults or {}).items():
        state.setdefault(k, v)
    return state


def current_token(store: MutableMapping[str, Any]) -> int:
    return store.get(_TOKEN_KEY, 0)


def is_mounted(store: MutableMapping[str, Any], token: int) -> bool:
    return store.get(_TOKEN_KEY) == token


def update(store: MutableMapping[str, Any], token: int, **values) -> bool:
    """Apply values to the mounted page state; returns False if the page was unmounted."""
    if not is_mounted(store, token):
        return False
    store[_STATE_KEY].update(values)
    return True


def begin_submit(store: MutableMapping[str, Any], state: Dict[str, Any], keys=(),
                 flag: str = 'loading', pending_key: str = 'pending') -> bool:
    """Submit-button on_click: flag the call as in flight and snapshot the form fields.

    Callbacks run before the script, so the run that makes the call already
    draws the button disabled. A click arriving while flagged is ignored.
    """
    if state.get(flag):
        return False
    state[flag] = True
    state[pending_key] = {k: store.get(k) for k in keys}
    return True
