"""View modules for manual routing.

Pages are routed by URL path (the `path` query parameter) through the registry
in `app.py` rather than Streamlit's automatic multi-page system. Every page
module exposes `view(ctx, route)`, where `ctx` is the session context and
`route.params` holds path parameters such as the customer id.

Add any new page as a module with a `view()` callable and register it in
`ROUTES` inside `app.py`; set `protected` to put it behind the session guard.
"""
