"""
Shared fixtures for all tests.
"""
import itertools
import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from moads.config import Settings
from moads.errors import DataAccessError
from moads.main import create_app
from moads.repository import CampaignRepository
from moads.services.base import DataClient


class FakeDataClient(DataClient):
    """
    In-memory stand-in for the Supabase client.

    Records every call in `calls` and fails any operation listed in `fail_on`.
    """

    def __init__(self, rows=None):
        self.rows = [dict(row) for row in (rows or [])]
        self.calls = []
        self.fail_on = set()
        self._ids = itertools.count(1)
        self._clock = datetime(2025, 8, 1, 12, 0, tzinfo=timezone.utc)

    def _check(self, operation):
        if operation in self.fail_on:
            raise DataAccessError(f"{operation} failed")

    async def select(self, table, order_by=None, descending=False, limit=None, column=None, value=None):
        params = {"order_by": order_by, "descending": descending, "limit": limit}
        if column:
            params[column] = value
        self.calls.append(("select", table, params))
        self._check("select")
        rows = [row for row in self.rows if not column or row[column] == value]
        if order_by:
            rows.sort(key=lambda row: row[order_by], reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [dict(row) for row in rows]

    async def insert(self, table, rows):
        self.calls.append(("insert", table, rows))
        self._check("insert")
        stored = []
        for row in rows:
            self._clock += timedelta(minutes=1)
            record = dict(row)
            record["id"] = f"generated-{next(self._ids)}"
            record["created_at"] = self._clock.isoformat()
            record["updated_at"] = self._clock.isoformat()
            self.rows.append(record)
            stored.append(dict(record))
        return stored

    async def update(self, table, values, column, value):
        self.calls.append(("update", table, {"values": values, column: value}))
        self._check("update")
        for row in self.rows:
            if row[column] == value:
                row.update(values)

    async def delete(self, table, column, value):
        self.calls.append(("delete", table, {column: value}))
        self._check("delete")
        self.rows = [row for row in self.rows if row[column] != value]

    def calls_for(self, operation):
        return [call for call in self.calls if call[0] == operation]


def make_campaign_row(**overrides):
    row = {
        "id": "campaign-1",
        "campaign_name": "Summer Launch",
        "google_ads_text": "Shop the summer collection",
        "meta_ads_caption": "Summer is here! #Launch",
        "budget": 2500.0,
        "start_date": "2025-06-01",
        "end_date": "2025-06-30",
        "audience": "Ages 25-45",
        "status": "active",
        "created_at": "2025-05-20T10:00:00+00:00",
        "updated_at": "2025-05-20T10:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def campaign_rows():
    """Three campaigns with distinct statuses, created on consecutive days."""
    return [
        make_campaign_row(
            id="campaign-1",
            campaign_name="Summer Launch",
            status="active",
            created_at="2025-05-20T10:00:00+00:00",
        ),
        make_campaign_row(
            id="campaign-2",
            campaign_name="Back to School",
            status="paused",
            budget=1200.0,
            created_at="2025-05-21T10:00:00+00:00",
        ),
        make_campaign_row(
            id="campaign-3",
            campaign_name="Spring Clearance",
            status="completed",
            budget=800.0,
            created_at="2025-05-22T10:00:00+00:00",
        ),
    ]


@pytest.fixture
def data_client(campaign_rows):
    return FakeDataClient(campaign_rows)


@pytest.fixture
def empty_data_client():
    return FakeDataClient()


@pytest.fixture
def repository(data_client):
    return CampaignRepository(data_client)


@pytest.fixture
def valid_draft():
    """The "Fall Sale" campaign as typed into the create form."""
    return {
        "campaign_name": "Fall Sale",
        "google_ads_text": "Save big",
        "meta_ads_caption": "🔥 Sale!",
        "budget": "1000",
        "start_date": "2025-09-01",
        "end_date": "2025-09-30",
        "audience": "Adults 18-65",
    }


@pytest.fixture
def test_settings():
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="test-anon-key",
        _env_file=None,
    )


@pytest.fixture
def app(test_settings, data_client):
    return create_app(settings=test_settings, data_client=data_client)


@pytest.fixture
def client(app):
    """FastAPI test client backed by the in-memory data client."""
    with TestClient(app) as c:
        yield c
