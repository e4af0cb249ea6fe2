from domain.constants import OVERDUE, DUE_TODAY, UPCOMING
from services.dashboard import load_dashboard
from utils.dates import classify_due

TODAY = '2026-10-19'


def _seed(client):
    acme = client.seed('customers', name='Acme', email='ops@acme.test')
    globex = client.seed('customers', name='Globex', email='hi@globex.test')
    client.seed('followups', customer_id=acme['id'], followup_date='2026-10-01', action='overdue call')
    client.seed('followups', customer_id=acme['id'], followup_date=TODAY, action='send contract')
    client.seed('followups', customer_id=globex['id'], followup_date=TODAY, action='demo', completed=True)
    client.seed('followups', customer_id=globex['id'], followup_date='2026-11-02', action='renewal')
    return acme, globex


def test_counters_match_table_counts(signed_in, client):
    _seed(client)
    data = load_dashboard(signed_in, TODAY)
    assert data.errors == {}
    assert data.total_customers == 2
    assert data.open_followups == 3
    assert data.today_followups_count == 1
    assert [t.action for t in data.today_tasks] == ['send contract']
    assert data.today_tasks[0].customer_name == 'Acme'


def test_upcoming_is_every_open_followup_by_date(signed_in, client):
    _seed(client)
    data = load_dashboard(signed_in, TODAY)
    assert [t.followup_date for t in data.upcoming_tasks] == ['2026-10-01', TODAY, '2026-11-02']
    assert [classify_due(t.followup_date, TODAY) for t in data.upcoming_tasks] == [OVERDUE, DUE_TODAY, UPCOMING]
    assert all(not t.completed for t in data.upcoming_tasks)


def test_each_failed_read_is_reported(signed_in, client):
    _seed(client)
    client.failures[('followups', 'select')] = 'connection reset'
    data = load_dashboard(signed_in, TODAY)
    assert set(data.errors) == {'open_followups', 'today_tasks', 'upcoming_tasks'}
    # The read that succeeded still lands
    assert data.total_customers == 2


def test_empty_tables(signed_in):
    data = load_dashboard(signed_in, TODAY)
    assert (data.total_customers, data.open_followups, data.today_followups_count) == (0, 0, 0)
    assert data.today_tasks == [] and data.upcoming_tasks == []
