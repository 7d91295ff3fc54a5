"""Smoke tests for the idseal gateway.

The seed provider is replaced with a fixed UUID so nothing depends on
the host running the tests.
"""

from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from idseal.app import create_app
from idseal.auth import make_api_key_checker
from idseal.config import IdsealConfig
from idseal.machine import MachineIdError
from idseal.routes import meta

SEED = "550e8400-e29b-41d4-a716-446655440000"
ZERO_SEED = "00000000-0000-0000-0000-000000000000"


def _make_test_app(config: IdsealConfig | None = None, seed: str = SEED) -> FastAPI:
    app = create_app(config or IdsealConfig())
    app.state.seed_provider = lambda: seed
    return app


def _no_machine_uuid() -> str:
    raise MachineIdError("Could not determine machine UUID on test")


@pytest.fixture
def client():
    return TestClient(_make_test_app())


class TestHealth:
    def test_health(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "service": "idseal"}

    def test_version(self, client):
        r = client.get("/api/v1/version")
        assert r.status_code == 200
        assert r.json()["gateway"] == "0.1.0"
        assert r.json()["token_prefix"] == "00"


class TestEncryptDecrypt:
    def test_round_trip(self, client):
        r = client.post("/api/v1/ids/encrypt", json={"custom_id": "alice", "uuid": SEED})
        assert r.status_code == 200
        token = r.json()["token"]
        assert r.json()["original"] == "alice"
        assert token.startswith("00")

        r = client.post("/api/v1/ids/decrypt", json={"token": token, "uuid": SEED})
        assert r.status_code == 200
        assert r.json() == {"token": token, "original": "alice"}

    def test_wrong_uuid(self, client):
        r = client.post("/api/v1/ids/encrypt", json={"custom_id": "alice", "uuid": SEED})
        token = r.json()["token"]

        r = client.post("/api/v1/ids/decrypt", json={"token": token, "uuid": ZERO_SEED})
        assert r.status_code == 400
        assert r.json()["kind"] == "decryption_error"
        assert r.json()["reason"] is None

    def test_missing_uuid_uses_machine_uuid(self, client):
        r = client.post("/api/v1/ids/encrypt", json={"custom_id": "alice"})
        assert r.status_code == 200
        token = r.json()["token"]

        r = client.post("/api/v1/ids/decrypt", json={"token": token, "uuid": SEED})
        assert r.status_code == 200
        assert r.json()["original"] == "alice"

    def test_configured_prefix(self):
        c = TestClient(_make_test_app(IdsealConfig(token_prefix="01")))
        r = c.post("/api/v1/ids/encrypt", json={"custom_id": "alice"})
        token = r.json()["token"]
        assert token.startswith("01")

        r = c.post("/api/v1/ids/decrypt", json={"token": token})
        assert r.json()["original"] == "alice"

    def test_validation_failure(self, client):
        r = client.post("/api/v1/ids/encrypt", json={"custom_id": "a" * 101})
        assert r.status_code == 422
        assert r.json()["kind"] == "validation_error"
        assert r.json()["reason"] == "too_long"
        assert r.json()["detail"]

    def test_unencodable_custom_id(self, client):
        r = client.post(
            "/api/v1/ids/encrypt",
            content='{"custom_id": "a\\ud800b", "uuid": "' + SEED + '"}',
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 422
        assert r.json()["reason"] == "invalid_characters"

    def test_empty_uuid_is_not_replaced(self, client):
        r = client.post("/api/v1/ids/encrypt", json={"custom_id": "alice", "uuid": ""})
        assert r.status_code == 422
        assert r.json()["reason"] == "empty_input"

    def test_bad_token_characters(self, client):
        r = client.post("/api/v1/ids/decrypt", json={"token": "bad!token"})
        assert r.status_code == 422
        assert r.json()["reason"] == "invalid_characters"

    def test_malformed_base64(self, client):
        r = client.post("/api/v1/ids/decrypt", json={"token": "00SGVsbG8"})
        assert r.status_code == 422
        assert r.json()["kind"] == "decode_error"

    def test_missing_field(self, client):
        r = client.post("/api/v1/ids/encrypt", json={"uuid": SEED})
        assert r.status_code == 422


class TestMachineUuid:
    def test_reports_seed_provider(self, client):
        r = client.get("/api/v1/machine-uuid")
        assert r.status_code == 200
        assert r.json() == {"uuid": SEED}

    def test_unavailable(self):
        app = _make_test_app()
        app.state.seed_provider = _no_machine_uuid
        c = TestClient(app)

        r = c.get("/api/v1/machine-uuid")
        assert r.status_code == 503

        r = c.post("/api/v1/ids/encrypt", json={"custom_id": "alice"})
        assert r.status_code == 503

        r = c.post("/api/v1/ids/encrypt", json={"custom_id": "alice", "uuid": SEED})
        assert r.status_code == 200


class TestAuth:
    def test_no_key_required_in_dev_mode(self, client):
        r = client.get("/api/v1/health")
        assert r.status_code == 200

    def test_key_required_when_configured(self):
        c = TestClient(_make_test_app(IdsealConfig(api_key="secret-key-123")))

        r = c.get("/api/v1/health")
        assert r.status_code == 401

        r = c.get("/api/v1/health", headers={"X-API-Key": "wrong"})
        assert r.status_code == 401

        r = c.get("/api/v1/health", headers={"X-API-Key": "secret-key-123"})
        assert r.status_code == 200

        r = c.post(
            "/api/v1/ids/encrypt",
            json={"custom_id": "alice"},
            headers={"X-API-Key": "wrong"},
        )
        assert r.status_code == 401

    def test_checker_on_bare_router(self):
        app = FastAPI()
        app.state.config = IdsealConfig()
        check_key = make_api_key_checker("k")
        app.include_router(meta.router, dependencies=[Depends(check_key)])
        c = TestClient(app)

        assert c.get("/api/v1/health").status_code == 401
        assert c.get("/api/v1/health", headers={"X-API-Key": "k"}).status_code == 200
