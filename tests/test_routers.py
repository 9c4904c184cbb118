"""API tests: workflow endpoints, reads and the cleanup job, against SQLite."""

import asyncio
import time

import httpx
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from app.dependencies import get_repository
from app.errors import GatewayError
from app.main import app
from app.repositories.base import YardRepository
from conftest import make_vehicle


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def check_in(client, **overrides):
    body = {"registration": "AB12CDE", "po_ref": "PO-100", "pager_number": "07000000000", "quoted_minutes": 30}
    body.update(overrides)
    return client.post("/api/v1/vehicles", json=body, headers={"X-Operator-Id": "op-1"})


class TestWorkflowEndpoints:
    def test_check_in_returns_events(self, client):
        resp = check_in(client)

        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "parked"
        assert body["sms_logged"] is True
        kinds = [e["kind"] for e in body["events"]]
        assert kinds == ["qr_display", "sms_simulator"]
        assert body["events"][1]["payload"]["phone"] == "07000000000"
        assert body["events"][1]["payload"]["quoted_minutes"] == 30

    def test_notify_then_release(self, client):
        vehicle_id = check_in(client).json()["vehicle_id"]

        notified = client.post(f"/api/v1/vehicles/{vehicle_id}/notify", headers={"X-Operator-Id": "op-1"})
        released = client.post(f"/api/v1/vehicles/{vehicle_id}/release", headers={"X-Operator-Id": "op-1"})

        assert notified.status_code == 200
        assert [e["kind"] for e in notified.json()["events"]] == ["sms_simulator", "refresh"]
        assert released.status_code == 200
        assert "0 mins" in released.json()["message"]
        assert client.get(f"/api/v1/vehicles/{vehicle_id}").json()["status"] == "released"

    def test_unknown_vehicle_is_404(self, client):
        assert client.post("/api/v1/vehicles/does-not-exist/notify").status_code == 404

    def test_repeat_release_is_409(self, client):
        vehicle_id = check_in(client).json()["vehicle_id"]
        client.post(f"/api/v1/vehicles/{vehicle_id}/release")
        assert client.post(f"/api/v1/vehicles/{vehicle_id}/release").status_code == 409

    def test_invalid_body_is_422(self, client):
        resp = client.post("/api/v1/vehicles", json={"po_ref": "PO-1"})
        assert resp.status_code == 422


class TestReadEndpoints:
    def test_lists_history_logs_activity_stats(self, client):
        vehicle_id = check_in(client).json()["vehicle_id"]
        client.post(f"/api/v1/vehicles/{vehicle_id}/notify", headers={"X-Operator-Id": "op-1"})

        vehicles = client.get("/api/v1/vehicles", params={"status": "notified"}).json()
        assert [v["id"] for v in vehicles] == [vehicle_id]

        history = client.get(f"/api/v1/vehicles/{vehicle_id}/sms-history").json()
        assert [h["message_type"] for h in history] == ["check_in", "notified"]
        assert history[0]["operator_name"] == "Sam Gate"

        assert len(client.get("/api/v1/logs").json()) == 4

        activity = client.get("/api/v1/activity").json()
        assert len(activity) == 4
        assert {a["marker"] for a in activity} == {"sms", "action"}

        stats = client.get("/api/v1/sms/stats/today").json()
        assert stats == {"total": 2, "by_type": {"check_in": 1, "notified": 1}}
        assert client.get("/api/v1/sms/kpi").json()["value"] == 2

    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["database"] == "ok"
        assert body["storage"] == "sql"


class TestCleanupJob:
    def test_success(self, client):
        resp = client.post("/api/v1/jobs/cleanup-prebookings")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "message": "Prebooking cleanup completed"}

    def test_failure_is_500(self):
        failing = MagicMock(spec=YardRepository)
        failing.consume_prebookings_before.side_effect = GatewayError("relation \"prebookings\" does not exist")
        failing.consume_prebookings_due.return_value = 0
        app.dependency_overrides[get_repository] = lambda: failing
        try:
            resp = TestClient(app).post("/api/v1/jobs/cleanup-prebookings")
        finally:
            app.dependency_overrides.clear()

        assert resp.status_code == 500
        assert resp.json() == {"ok": False, "error": "relation \"prebookings\" does not exist"}


class TestConcurrentRequests:
    @pytest.mark.asyncio
    async def test_slow_backend_call_does_not_block_other_vehicles(self):
        def get_vehicle(vehicle_id):
            if vehicle_id == "slow":
                time.sleep(1.0)
            return make_vehicle(id=vehicle_id)

        repo = MagicMock(spec=YardRepository)
        repo.get_vehicle.side_effect = get_vehicle
        repo.update_vehicle.side_effect = lambda vehicle_id, patch: make_vehicle(id=vehicle_id, status="notified")
        app.dependency_overrides[get_repository] = lambda: repo
        finished = {}
        start = time.monotonic()

        async def notify(vehicle_id):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                resp = await client.post(f"/api/v1/vehicles/{vehicle_id}/notify")
            finished[vehicle_id] = time.monotonic() - start
            return resp

        try:
            responses = await asyncio.gather(notify("slow"), notify("fast"))
        finally:
            app.dependency_overrides.clear()

        assert [r.status_code for r in responses] == [200, 200]
        assert finished["fast"] < 0.5
        assert finished["slow"] >= 1.0
