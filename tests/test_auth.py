import pytest

from domain.errors import BackendError, NotAuthenticatedError, ValidationError
from services import auth as auth_svc


def test_signup_short_password_never_reaches_backend(ctx, client):
    with pytest.raises(ValidationError):
        auth_svc.sign_up(ctx, 'new@example.com', '12345')
    assert 'sign_up' not in client.auth.calls
    assert client.auth.users == {}


def test_signup_trims_and_registers(ctx, client):
    user = auth_svc.sign_up(ctx, '  new@example.com ', ' 123456 ')
    assert user.email == 'new@example.com'
    assert client.auth.users['new@example.com'][0] == '123456'


def test_signup_error_message_is_verbatim(ctx, client):
    auth_svc.sign_up(ctx, 'dup@example.com', 'secret1')
    with pytest.raises(BackendError) as exc:
        auth_svc.sign_up(ctx, 'dup@example.com', 'secret1')
    assert exc.value.message == "User already registered"


def test_sign_in_records_session_on_context(ctx, client):
    auth_svc.sign_up(ctx, 'rep@example.com', 'secret1')
    session = auth_svc.sign_in(ctx, 'rep@example.com', 'secret1')
    assert session is not None
    assert ctx.session is session
    assert session.user.email == 'rep@example.com'


def test_sign_in_bad_password(ctx, client):
    auth_svc.sign_up(ctx, 'rep@example.com', 'secret1')
    with pytest.raises(BackendError) as exc:
        auth_svc.sign_in(ctx, 'rep@example.com', 'wrong-pass')
    assert exc.value.message == "Invalid login credentials"
    assert ctx.session is None


def test_sign_out_clears_session(signed_in):
    assert auth_svc.current_session(signed_in) is not None
    auth_svc.sign_out(signed_in)
    assert signed_in.session is None
    assert auth_svc.current_session(signed_in) is None


def test_require_user_without_session(ctx):
    with pytest.raises(NotAuthenticatedError) as exc:
        auth_svc.require_user(ctx)
    assert exc.value.message == "No user found"
