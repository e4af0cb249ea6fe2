"""Auth service: sign-up, sign-in, sign-out and session lookups against the hosted provider."""
from __future__ import annotations
import logging
from typing import Any, Optional

from domain.constants import MIN_PASSWORD_LENGTH, MSG_NO_USER
from domain.errors import NotAuthenticatedError, ValidationError
from domain.models import AuthSession, AuthUser
from services.backend import CrmContext, call

logger = logging.getLogger(__name__)


def _to_user(raw: Any) -> Optional[AuthUser]:
    if raw is None:
        return None
    return AuthUser(id=str(raw.id), email=getattr(raw, 'email', None))


def _to_session(raw: Any) -> Optional[AuthSession]:
    if raw is None or getattr(raw, 'user', None) is None:
        return None
    return AuthSession(user=_to_user(raw.user), access_token=getattr(raw, 'access_token', None))


def _credentials(email: str, password: str) -> dict:
    email = (email or '').strip()
    password = (password or '').strip()
    if not email or not password:
        raise ValidationError("Email and password are required.")
    return {"email": email, "password": password}


def sign_up(ctx: CrmContext, email: str, password: str) -> Optional[AuthUser]:
    """Register a new account; the provider sends the verification email.

    Passwords shorter than MIN_PASSWORD_LENGTH never reach the provider.
    """
    creds = _credentials(email, password)
    if len(creds['password']) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    resp = call("sign up", lambda: ctx.auth.sign_up(creds))
    logger.info("Sign-up requested for %s", creds['email'])
    return _to_user(getattr(resp, 'user', None))


def sign_in(ctx: CrmContext, email: str, password: str) -> Optional[AuthSession]:
    creds = _credentials(email, password)
    resp = call("sign in", lambda: ctx.auth.sign_in_with_password(creds))
    ctx.session = _to_session(getattr(resp, 'session', None))
    logger.info("Signed in as %s", creds['email'])
    return ctx.session


def sign_out(ctx: CrmContext):
    call("sign out", ctx.auth.sign_out)
    ctx.session = None
    logger.info("Signed out")


def get_user(ctx: CrmContext) -> Optional[AuthUser]:
    resp = call("get user", ctx.auth.get_user)
    if resp is None:
        return None
    return _to_user(getattr(resp, 'user', None))


def require_user(ctx: CrmContext) -> AuthUser:
    user = get_user(ctx)
    if user is None:
        raise NotAuthenticatedError(MSG_NO_USER)
    return user


def current_session(ctx: CrmContext) -> Optional[AuthSession]:
    """Ask the client for its active session and record it on the context."""
    ctx.session = _to_session(call("get session", ctx.auth.get_session))
    return ctx.session
