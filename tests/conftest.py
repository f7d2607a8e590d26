import os

os.environ["SUPABASE_URL"] = "https://testproject.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "anon-test-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret-with-at-least-32-bytes!!"
os.environ["KEEP_ALIVE_ENABLED"] = "false"
os.environ["CURRENCY"] = "PHP"
os.environ["CURRENCY_LOCALE"] = "en_PH"

import uuid
from copy import deepcopy
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from app import create_app
from app.database.connection import get_session
from app.database.supabase import RecordNotFoundError, RecordStoreError

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]


class FakeStore:
    """Supabase em memória com a mesma interface do SupabaseClient."""

    def __init__(self):
        self.tables = {}
        self.fail_with = None
        self.calls = []
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def _check(self, operation, table):
        self.calls.append((operation, table))
        if self.fail_with is not None:
            raise self.fail_with

    def seed(self, table, *rows):
        for row in rows:
            record = {"created_at": self._tick(), **row}
            record.setdefault("id", str(uuid.uuid4()))
            record.setdefault("updated_at", record["created_at"])
            self.tables.setdefault(table, []).append(record)
        return self.tables[table]

    def _matches(self, row, filters):
        return all(row.get(column) == value for column, value in (filters or {}).items())

    async def select(self, table, filters=None, order=None, ascending=True, limit=None, columns="*"):
        self._check("select", table)
        rows = [deepcopy(row) for row in self.tables.get(table, []) if self._matches(row, filters)]
        if order:
            rows.sort(key=lambda row: (row.get(order) is None, row.get(order)), reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def select_one(self, table, filters=None, order=None, ascending=True, columns="*"):
        rows = await self.select(table, filters, order=order, ascending=ascending, limit=1, columns=columns)
        return rows[0] if rows else None

    async def insert(self, table, record):
        self._check("insert", table)
        rows = self.tables.setdefault(table, [])
        if "code" in record and any(row.get("code") == record["code"] for row in rows):
            raise RecordStoreError("duplicate key value violates unique constraint", status_code=409, code="23505")
        if "id" in record and any(row["id"] == record["id"] for row in rows):
            raise RecordStoreError("duplicate key value violates unique constraint", status_code=409, code="23505")
        created = {"id": str(uuid.uuid4()), **record, "created_at": self._tick()}
        created["updated_at"] = created["created_at"]
        rows.append(created)
        return deepcopy(created)

    async def update(self, table, record_id, values):
        self._check("update", table)
        for row in self.tables.get(table, []):
            if row["id"] == record_id:
                row.update(values)
                row["updated_at"] = self._tick()
                return deepcopy(row)
        raise RecordNotFoundError(table, record_id)

    async def delete(self, table, record_id):
        self._check("delete", table)
        rows = self.tables.get(table, [])
        for index, row in enumerate(rows):
            if row["id"] == record_id:
                del rows[index]
                return
        raise RecordNotFoundError(table, record_id)

    async def upsert(self, table, records, on_conflict="id"):
        self._check("upsert", table)
        rows = self.tables.setdefault(table, [])
        saved = []
        for record in records:
            existing = next((row for row in rows if row[on_conflict] == record[on_conflict]), None)
            if existing is None:
                existing = dict(record)
                rows.append(existing)
            else:
                existing.update(record)
            saved.append(deepcopy(existing))
        return saved

    async def ping(self, table="products"):
        self._check("ping", table)


def make_token(role=None, expires_in=3600, sub="user-1", email="admin@example.com"):
    payload = {
        "sub": sub,
        "email": email,
        "role": "authenticated",
        "aud": "authenticated",
        "app_metadata": {"role": role} if role else {},
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def app(store):
    application = create_app()
    application.dependency_overrides[get_session] = lambda: store
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token(role='admin')}"}


@pytest.fixture
def customer_headers():
    return {"Authorization": f"Bearer {make_token(sub='user-2', email='buyer@example.com')}"}
