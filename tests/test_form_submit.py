import datetime as dt
from types import SimpleNamespace
from unittest.mock import MagicMock

from ui.components import customer_form
from views import add_customer, login
from views import customer_details as details_page


def _fake_streamlit():
    fake = MagicMock()
    fake.session_state = {}
    fake.button.return_value = False
    fake.columns.side_effect = lambda spec: [MagicMock() for _ in range(spec if isinstance(spec, int) else len(spec))]
    return fake


def _last_submit(fake):
    return fake.form_submit_button.call_args_list[-1].kwargs


def _click(fake):
    """Streamlit runs the submit button's on_click before the next script run."""
    kwargs = _last_submit(fake)
    kwargs['on_click'](*kwargs['args'])


def test_login_run_making_the_call_draws_submit_disabled(ctx, client, monkeypatch):
    fake = _fake_streamlit()
    monkeypatch.setattr(login, 'st', fake)
    monkeypatch.setattr(login, 'action_banner', MagicMock())
    monkeypatch.setattr(login, 'navigate', MagicMock())
    route = SimpleNamespace(path='/login', params={})

    login.view(ctx, route)
    assert _last_submit(fake)['disabled'] is False

    state = fake.session_state['_page_state']
    seen = []
    sign_in = client.auth.sign_in_with_password

    def record_loading(creds):
        seen.append(state['loading'])
        return sign_in(creds)

    client.auth.sign_in_with_password = record_loading
    fake.session_state.update(login_email='ghost@example.com', login_password='whatever')
    _click(fake)
    login.view(ctx, route)

    assert seen == [True]
    assert _last_submit(fake)['disabled'] is True
    assert _last_submit(fake)['args'][1] is state
    assert state['loading'] is False
    assert state['error'] == 'Invalid login credentials'
    assert 'pending' not in state
    fake.rerun.assert_called()

    login.view(ctx, route)
    assert _last_submit(fake)['disabled'] is False


def test_login_second_click_while_in_flight_signs_in_once(ctx, client, monkeypatch):
    fake = _fake_streamlit()
    monkeypatch.setattr(login, 'st', fake)
    monkeypatch.setattr(login, 'action_banner', MagicMock())
    monkeypatch.setattr(login, 'navigate', MagicMock())
    route = SimpleNamespace(path='/login', params={})
    client.auth.sign_up({'email': 'rep@example.com', 'password': 'secret1'})

    login.view(ctx, route)
    fake.session_state.update(login_email='rep@example.com', login_password='secret1')
    _click(fake)
    _click(fake)
    login.view(ctx, route)

    assert client.auth.calls.count('sign_in_with_password') == 1
    login.navigate.assert_called_once_with('/')


def test_add_customer_insert_runs_with_submit_disabled(signed_in, client, monkeypatch):
    fake = _fake_streamlit()
    monkeypatch.setattr(add_customer, 'st', fake)
    monkeypatch.setattr(customer_form, 'st', fake)
    monkeypatch.setattr(add_customer, 'action_banner', MagicMock())
    monkeypatch.setattr(add_customer, 'navigate', MagicMock())
    route = SimpleNamespace(path='/add-customer', params={})

    add_customer.view(signed_in, route)
    state = fake.session_state['_page_state']

    # Missing email never starts the insert
    fake.session_state.update(add_customer_name='Ada', add_customer_email='  ', add_customer_status='New')
    _click(fake)
    add_customer.view(signed_in, route)
    assert state['form_error'] == customer_form.MSG_REQUIRED
    assert _last_submit(fake)['disabled'] is False
    assert client.tables['customers'] == []

    seen = []
    insert = add_customer.customer_svc.add_customer

    def record_loading(ctx, **fields):
        seen.append(state['loading'])
        return insert(ctx, **fields)

    monkeypatch.setattr(add_customer.customer_svc, 'add_customer', record_loading)
    fake.session_state.update(add_customer_email='ada@example.com', add_customer_phone='', add_customer_status='Interested')
    _click(fake)
    add_customer.view(signed_in, route)

    assert seen == [True]
    assert _last_submit(fake)['disabled'] is True
    assert state['form_error'] is None
    assert [(c['name'], c['email'], c['status']) for c in client.tables['customers']] == [
        ('Ada', 'ada@example.com', 'Interested')
    ]
    add_customer.navigate.assert_called_once_with('/customers')


def test_interaction_insert_runs_with_save_disabled(signed_in, client, monkeypatch):
    fake = _fake_streamlit()
    monkeypatch.setattr(details_page, 'st', fake)
    monkeypatch.setattr(details_page, 'interaction_item', MagicMock())
    cust = client.seed('customers', name='Acme', email='ops@acme.test')
    state = {'interactions': [], 'action_error': None}

    details_page._interaction_panel(signed_in, state, cust['id'])
    assert _last_submit(fake)['disabled'] is False

    seen = []
    insert = details_page.interaction_svc.add_interaction

    def record_flag(ctx, customer_id, notes, **kwargs):
        seen.append(state['submitting_interaction'])
        return insert(ctx, customer_id, notes, **kwargs)

    monkeypatch.setattr(details_page.interaction_svc, 'add_interaction', record_flag)
    fake.session_state.update(ix_type='Meeting', ix_date=dt.date(2026, 10, 19), ix_notes='lunch')
    _click(fake)
    details_page._interaction_panel(signed_in, state, cust['id'])

    assert seen == [True]
    assert _last_submit(fake)['disabled'] is True
    assert state['submitting_interaction'] is False
    first = state['interactions'][0]
    assert (first.type, first.notes, first.date) == ('Meeting', 'lunch', '2026-10-19')
    assert 'ix_notes' not in fake.session_state
