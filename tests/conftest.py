import itertools
import os
import sys
import uuid
from types import SimpleNamespace

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from postgrest.exceptions import APIError
from supabase import AuthError

from services.backend import CrmContext


class FakeAuthError(AuthError):
    def __init__(self, message):
        Exception.__init__(self, message)
        self.message = message
        self.code = None
        self.status = 400


class FakeQuery:
    """Just enough of the PostgREST fluent builder for the services under test."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = 'select'
        self.columns = '*'
        self.count = None
        self.head = False
        self.payload = None
        self.filters = []
        self.orders = []
        self.single = False

    def select(self, *columns, count=None, head=False):
        self.op = 'select'
        self.columns = ','.join(columns) or '*'
        self.count = count
        self.head = head
        return self

    def insert(self, rows):
        self.op = 'insert'
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, values):
        self.op = 'update'
        self.payload = values
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def maybe_single(self):
        self.single = True
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def _join(self, row):
        out = dict(row)
        if 'customers(name)' in self.columns.replace(' ', ''):
            cust = next((c for c in self.db.tables['customers'] if c['id'] == row.get('customer_id')), None)
            out['customers'] = {'name': cust['name']} if cust else None
        return out

    def execute(self):
        self.db.calls.append((self.table, self.op))
        failure = self.db.failures.get((self.table, self.op))
        if failure:
            raise APIError({"message": failure, "code": "XX000", "details": None, "hint": None})
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == 'insert':
            created = []
            for r in self.payload:
                row = {'id': str(uuid.uuid4()), **r}
                if self.table == 'customers':
                    row.setdefault('created_at', self.db.next_timestamp())
                if self.table == 'followups':
                    row.setdefault('completed', False)
                rows.append(row)
                created.append(dict(row))
            return SimpleNamespace(data=created, count=None)

        if self.op == 'update':
            changed = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    changed.append(dict(row))
            return SimpleNamespace(data=changed, count=None)

        selected = [self._join(r) for r in rows if self._matches(r)]
        for column, desc in reversed(self.orders):
            selected.sort(key=lambda r: r.get(column) or '', reverse=desc)
        count = len(selected) if self.count else None
        if self.head:
            return SimpleNamespace(data=[], count=count)
        if self.single:
            return SimpleNamespace(data=selected[0] if selected else None, count=count)
        return SimpleNamespace(data=selected, count=count)


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.session = None
        self.calls = []
        self.fail_with = None

    def _check(self, name):
        self.calls.append(name)
        if self.fail_with:
            raise FakeAuthError(self.fail_with)

    def sign_up(self, creds):
        self._check('sign_up')
        if creds['email'] in self.users:
            raise FakeAuthError("User already registered")
        user = SimpleNamespace(id=str(uuid.uuid4()), email=creds['email'])
        self.users[creds['email']] = (creds['password'], user)
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, creds):
        self._check('sign_in_with_password')
        stored = self.users.get(creds['email'])
        if not stored or stored[0] != creds['password']:
            raise FakeAuthError("Invalid login credentials")
        self.session = SimpleNamespace(access_token='token-' + stored[1].id, user=stored[1])
        return SimpleNamespace(user=stored[1], session=self.session)

    def sign_out(self):
        self._check('sign_out')
        self.session = None

    def get_user(self):
        self._check('get_user')
        if self.session is None:
            return None
        return SimpleNamespace(user=self.session.user)

    def get_session(self):
        self._check('get_session')
        return self.session


class FakeSupabase:
    def __init__(self):
        self.auth = FakeAuth()
        self.tables = {'customers': [], 'interactions': [], 'followups': []}
        self.calls = []
        # (table, op) -> error message raised as APIError
        self.failures = {}
        self._clock = itertools.count(1)

    def table(self, name):
        return FakeQuery(self, name)

    def next_timestamp(self):
        return f"2026-01-01T00:00:{next(self._clock):02d}+00:00"

    def seed(self, table, **row):
        row.setdefault('id', str(uuid.uuid4()))
        if table == 'customers':
            row.setdefault('created_at', self.next_timestamp())
            row.setdefault('status', 'New')
        if table == 'followups':
            row.setdefault('completed', False)
        self.tables[table].append(row)
        return row


@pytest.fixture()
def client():
    return FakeSupabase()


@pytest.fixture()
def ctx(client):
    return CrmContext(client=client)


@pytest.fixture()
def signed_in(ctx, client):
    """A context whose user has registered and signed in."""
    client.auth.sign_up({'email': 'rep@example.com', 'password': 'secret1'})
    client.auth.sign_in_with_password({'email': 'rep@example.com', 'password': 'secret1'})
    return ctx
