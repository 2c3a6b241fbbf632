"""
API tests with in-memory adapters.

Dependencies are overridden so no database is needed; the client is used
without a context manager so startup (database connect, SMS capture) does
not run.
"""
import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from api.v1.dependencies import get_feed, get_kv_store, get_repository
from api.v1.routes.health import get_optional_repository
from application.preferences import AUTO_CONFIRM_KEY
from application.transaction_feed import TransactionFeed
from domain.enums import TransactionDirection
from domain.exceptions import StorageError
from infrastructure.storage.kv_staging_queue import PENDING_TRANSACTIONS_KEY
from main import app
from tests.conftest import make_transaction


@pytest.fixture
def feed():
    return TransactionFeed()


@pytest.fixture
def client(repository, kv_store, feed):
    async def override_repository():
        return repository

    async def override_kv_store():
        return kv_store

    app.dependency_overrides[get_repository] = override_repository
    app.dependency_overrides[get_kv_store] = override_kv_store
    app.dependency_overrides[get_optional_repository] = override_repository
    app.dependency_overrides[get_feed] = lambda: feed

    yield TestClient(app)

    app.dependency_overrides.clear()


def add(repository, tx):
    repository.rows[tx.id] = tx


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["service"] == "SMS Expense Tracker API"


class TestHealth:

    def test_healthy(self, client):
        data = client.get("/api/v1/health").json()

        assert data["status"] == "healthy"
        assert data["database_status"] == "connected"
        assert data["sms_listener_active"] is False

    def test_database_unreachable(self, client, repository):
        repository.healthy = False

        data = client.get("/api/v1/health").json()

        assert data["status"] == "degraded"
        assert data["database_status"] == "unreachable"

    def test_connection_error(self, client):
        async def failing():
            return StorageError("connection refused")

        app.dependency_overrides[get_optional_repository] = failing

        data = client.get("/api/v1/health").json()

        assert data["status"] == "degraded"
        assert data["database_status"] == "error: connection refused"


class TestTransactions:

    def test_list_newest_first(self, client, repository):
        add(repository, make_transaction("tx_old", occurred_at=datetime(2024, 3, 1)))
        add(repository, make_transaction("tx_new", occurred_at=datetime(2024, 3, 9)))

        response = client.get("/api/v1/transactions")

        assert response.status_code == 200
        body = response.json()
        assert [tx["id"] for tx in body] == ["tx_new", "tx_old"]
        assert body[0]["amount"] == "250.00"
        assert body[0]["direction"] == "debit"

    def test_pagination(self, client, repository):
        for day in range(1, 6):
            add(repository, make_transaction(f"tx_{day}", occurred_at=datetime(2024, 3, day)))

        body = client.get("/api/v1/transactions", params={"limit": 2, "offset": 1}).json()

        assert [tx["id"] for tx in body] == ["tx_4", "tx_3"]

    def test_limit_validation(self, client):
        assert client.get("/api/v1/transactions", params={"limit": 0}).status_code == 422
        assert client.get("/api/v1/transactions", params={"limit": 501}).status_code == 422

    def test_by_month_and_summary(self, client, repository):
        add(repository, make_transaction("tx_a", amount="100.25", occurred_at=datetime(2024, 2, 10)))
        add(repository, make_transaction("tx_b", amount="50", occurred_at=datetime(2024, 2, 28)))
        add(repository, make_transaction(
            "tx_c", amount="1000", direction=TransactionDirection.CREDIT, occurred_at=datetime(2024, 2, 1)
        ))
        add(repository, make_transaction("tx_d", amount="7", occurred_at=datetime(2024, 3, 1)))

        listed = client.get("/api/v1/transactions/2024/2").json()
        summary = client.get("/api/v1/transactions/2024/2/summary").json()

        assert [tx["id"] for tx in listed] == ["tx_b", "tx_a", "tx_c"]
        assert summary["transaction_count"] == 3
        assert summary["total_debit"] == "150.25"
        assert summary["total_credit"] == "1000"

    def test_invalid_month(self, client):
        assert client.get("/api/v1/transactions/2024/13").status_code == 422

    def test_add_manual_transaction(self, client, repository, feed):
        response = client.post("/api/v1/transactions", json={
            "amount": "120.50",
            "direction": "debit",
            "occurred_on": "2024-03-05",
            "description": "Lunch"
        })

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("manual_")
        assert data["origin"] == "manual"
        assert data["bank"] == "Manual Entry"
        assert data["occurred_at"] == "2024-03-05T00:00:00"
        assert data["id"] in repository.rows
        assert [tx.id for tx in feed.transactions] == [data["id"]]

    @pytest.mark.parametrize("payload", [
        {"amount": "0", "description": "Lunch"},
        {"amount": "-1", "description": "Lunch"},
        {"amount": "10", "description": ""},
        {"amount": "10", "description": "Lunch", "direction": "refund"},
        {"description": "Lunch"},
    ])
    def test_add_manual_transaction_validation(self, client, repository, payload):
        response = client.post("/api/v1/transactions", json=payload)

        assert response.status_code == 422
        assert repository.rows == {}

    def test_blank_description_rejected(self, client, repository):
        response = client.post("/api/v1/transactions", json={"amount": "10", "description": "   "})

        assert response.status_code == 400
        assert repository.rows == {}

    def test_storage_failure_is_503(self, client, repository):
        repository.fail = True

        response = client.get("/api/v1/transactions")

        assert response.status_code == 503
        assert response.json()["error"] == "storage_unavailable"


class TestPending:

    def test_list_confirm_reject(self, client, kv_store, repository, feed):
        kv_store.items[PENDING_TRANSACTIONS_KEY] = json.dumps([
            make_transaction("tx_keep").to_dict(),
            make_transaction("tx_drop").to_dict(),
        ])

        listed = client.get("/api/v1/pending").json()
        assert [tx["id"] for tx in listed] == ["tx_keep", "tx_drop"]

        confirmed = client.post("/api/v1/pending/tx_keep/confirm")
        assert confirmed.status_code == 200
        assert confirmed.json()["id"] == "tx_keep"
        assert "tx_keep" in repository.rows
        assert [tx.id for tx in feed.transactions] == ["tx_keep"]

        rejected = client.delete("/api/v1/pending/tx_drop")
        assert rejected.status_code == 200
        assert rejected.json() == {"success": True, "id": "tx_drop", "action": "rejected"}

        assert client.get("/api/v1/pending").json() == []
        assert "tx_drop" not in repository.rows

    def test_unknown_id_is_404(self, client):
        assert client.post("/api/v1/pending/tx_nope/confirm").status_code == 404
        assert client.delete("/api/v1/pending/tx_nope").status_code == 404


class TestAutoConfirmSetting:

    def test_default_enabled(self, client):
        assert client.get("/api/v1/settings/auto-confirm").json() == {"enabled": True}

    def test_toggle(self, client, kv_store):
        response = client.put("/api/v1/settings/auto-confirm", json={"enabled": False})

        assert response.json() == {"enabled": False}
        assert kv_store.items[AUTO_CONFIRM_KEY] == "false"
        assert client.get("/api/v1/settings/auto-confirm").json() == {"enabled": False}

    def test_settings_failure_is_503(self, client, kv_store):
        kv_store.fail = True

        assert client.get("/api/v1/settings/auto-confirm").status_code == 503
