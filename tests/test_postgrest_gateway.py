"""Unit tests for the hosted-backend REST client."""

import pytest
import requests
from unittest.mock import MagicMock, patch
from datetime import date, datetime

from app.gateway.postgrest import PostgrestGateway, Filter, eq, gte, is_null, lt, not_null


def make_response(status=200, json_body=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.json.return_value = json_body
    resp.content = b"x" if json_body is not None else b""
    resp.text = text
    return resp


@pytest.fixture
def gateway():
    return PostgrestGateway("https://abc.supabase.co/", "anon-key", timeout=5)


class TestPostgrestGateway:
    def test_insert_posts_record_and_returns_rows(self, gateway):
        with patch("app.gateway.postgrest.requests.request", return_value=make_response(201, [{"id": 7}])) as req:
            result = gateway.insert("actions_log", {"action": "check_in", "timestamp": datetime(2026, 10, 19, 9, 0)})

        assert result.ok
        assert result.data == [{"id": 7}]
        method, url = req.call_args.args
        kwargs = req.call_args.kwargs
        assert method == "POST"
        assert url == "https://abc.supabase.co/rest/v1/actions_log"
        assert kwargs["json"] == {"action": "check_in", "timestamp": "2026-10-19T09:00:00"}
        assert kwargs["headers"]["apikey"] == "anon-key"
        assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
        assert kwargs["headers"]["Prefer"] == "return=representation"
        assert kwargs["timeout"] == 5

    def test_select_encodes_columns_filters_order_limit(self, gateway):
        with patch("app.gateway.postgrest.requests.request", return_value=make_response(200, [])) as req:
            gateway.select(
                "actions_log",
                columns="message_type,\n  operators(name)",
                filters=[eq("vehicle_id", "v1"), not_null("message_type"), gte("timestamp", date(2026, 10, 19))],
                order=[("timestamp", True), ("id", True)],
                limit=20,
            )

        assert req.call_args.args[0] == "GET"
        assert req.call_args.kwargs["params"] == [
            ("select", "message_type,operators(name)"),
            ("vehicle_id", "eq.v1"),
            ("message_type", "not.is.null"),
            ("timestamp", "gte.2026-10-19"),
            ("order", "timestamp.asc,id.asc"),
            ("limit", "20"),
        ]

    def test_update_patches_with_filters(self, gateway):
        with patch("app.gateway.postgrest.requests.request", return_value=make_response(200, [{}, {}])) as req:
            result = gateway.update("prebookings", {"consumed": True},
                                    [lt("expected_date", date(2026, 10, 19)), eq("consumed", False)])

        assert len(result.data) == 2
        assert req.call_args.args[0] == "PATCH"
        assert req.call_args.kwargs["params"] == [("expected_date", "lt.2026-10-19"), ("consumed", "eq.false")]
        assert req.call_args.kwargs["json"] == {"consumed": True}

    def test_delete(self, gateway):
        with patch("app.gateway.postgrest.requests.request", return_value=make_response(204)) as req:
            result = gateway.delete("actions_log", [is_null("vehicle_id")])

        assert result.ok
        assert result.data is None
        assert req.call_args.args[0] == "DELETE"
        assert req.call_args.kwargs["params"] == [("vehicle_id", "is.null")]

    def test_http_error_becomes_error_payload(self, gateway):
        resp = make_response(409, text='{"message":"duplicate key value"}')
        with patch("app.gateway.postgrest.requests.request", return_value=resp):
            result = gateway.insert("vehicles", {"registration": "AB12CDE"})

        assert not result.ok
        assert "duplicate key" in result.error
        assert result.status_code == 409

    def test_network_error_becomes_error_payload(self, gateway):
        with patch("app.gateway.postgrest.requests.request",
                   side_effect=requests.exceptions.ConnectionError("unreachable")):
            result = gateway.select("vehicles")

        assert not result.ok
        assert "unreachable" in result.error

    def test_unsupported_operator_rejected(self):
        with pytest.raises(ValueError):
            Filter("status", "like", "park%")
