# app/gateway/postgrest.py
"""
Thin client for the hosted backend's REST interface (PostgREST / Supabase).

Four calls: insert, select, update, delete. Each returns a GatewayResult
carrying either `data` or an `error` string; nothing here raises on a failed
request. Filters map onto PostgREST query parameters, e.g.
Filter("expected_date", "lt", date(2026, 1, 1)) → expected_date=lt.2026-01-01
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Iterable, Optional, Sequence

import requests

from app.utils.logger import get_logger

logger = get_logger(__name__)

REST_PATH = "/rest/v1"
SUPPORTED_OPS = {"eq", "lt", "gte", "is", "not.is"}


@dataclass(frozen=True)
class Filter:
    column: str
    op: str
    value: Any = None

    def __post_init__(self):
        if self.op not in SUPPORTED_OPS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


def eq(column, value):
    return Filter(column, "eq", value)


def lt(column, value):
    return Filter(column, "lt", value)


def gte(column, value):
    return Filter(column, "gte", value)


def is_null(column):
    return Filter(column, "is", None)


def not_null(column):
    return Filter(column, "not.is", None)


@dataclass
class GatewayResult:
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def encode_value(value: Any) -> Any:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def _encode_record(record: dict) -> dict:
    out = {}
    for key, value in record.items():
        if isinstance(value, (datetime, date, time)):
            out[key] = value.isoformat()
        else:
            out[key] = value
    return out


class PostgrestGateway:
    def __init__(self, endpoint_url: str, api_key: str, timeout: Optional[float] = None):
        self.base_url = endpoint_url.rstrip("/") + REST_PATH
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self, prefer: Optional[str] = None) -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    @staticmethod
    def filter_params(filters: Iterable[Filter]) -> list[tuple[str, str]]:
        return [(f.column, f"{f.op}.{encode_value(f.value)}") for f in filters]

    def _send(self, method: str, table: str, params=None, body=None, prefer=None) -> GatewayResult:
        url = f"{self.base_url}/{table}"
        try:
            resp = requests.request(
                method, url,
                params=params or [],
                json=body,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {table} failed: {e}")
            return GatewayResult(error=str(e))

        if not resp.ok:
            logger.error(f"{method} {table} → HTTP {resp.status_code}: {resp.text}")
            return GatewayResult(error=resp.text or f"HTTP {resp.status_code}", status_code=resp.status_code)

        data = resp.json() if resp.content else None
        return GatewayResult(data=data, status_code=resp.status_code)

    def insert(self, table: str, record: dict) -> GatewayResult:
        return self._send("POST", table, body=_encode_record(record), prefer="return=representation")

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Sequence[tuple[str, bool]] = (),
        limit: Optional[int] = None,
    ) -> GatewayResult:
        """`order` is a list of (column, ascending) pairs."""
        params = [("select", "".join(columns.split()))]
        params += self.filter_params(filters)
        if order:
            params.append(("order", ",".join(f"{col}.{'asc' if asc else 'desc'}" for col, asc in order)))
        if limit is not None:
            params.append(("limit", str(limit)))
        return self._send("GET", table, params=params)

    def update(self, table: str, patch: dict, filters: Sequence[Filter]) -> GatewayResult:
        return self._send("PATCH", table, params=self.filter_params(filters),
                          body=_encode_record(patch), prefer="return=representation")

    def delete(self, table: str, filters: Sequence[Filter]) -> GatewayResult:
        return self._send("DELETE", table, params=self.filter_params(filters), prefer="return=representation")
