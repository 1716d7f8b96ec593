"""Façade over a PostgREST-compatible hosted table API.

Speaks the wire contract of the hosted backend: equality filters as
``column=eq.value``, single-column ``order``, ``Prefer: count=exact`` for
row-count-only requests and ``Prefer: return=representation`` on insert.
"""

from __future__ import annotations

import http.client
import json
import logging
import re
from typing import Any, Mapping, Optional, Sequence
from urllib import error, request
from urllib.parse import quote, urlencode, urlparse

from starlette.concurrency import run_in_threadpool

from organic_trace.core.errors import RemoteError
from organic_trace.services.table_client import Filters, OrderBy, Row, TableClient, check_table

logger = logging.getLogger(__name__)

_ALLOWED_HTTP_SCHEMES = {"http", "https"}
_CONTENT_RANGE_TOTAL_RE = re.compile(r"/(\d+)\s*$")


def validate_base_url(base_url):
    parsed = urlparse(base_url or "")
    if parsed.scheme.lower() not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise RemoteError("REST_URL must be an absolute HTTP(S) URL")
    return base_url.rstrip("/")


def _filter_value(value):
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return "is.{}".format("true" if value else "false")
    return "eq.{}".format(value)


def _search_pattern(term):
    # PostgREST reads "*" as "%" and offers no escape for it, so a literal "*"
    # is sent as the one-character wildcard "_" and re-checked by the caller.
    escaped = (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
        .replace("*", "_")
    )
    return "ilike.*{}*".format(escaped)


def build_query(filters=None, order_by=None, limit=None, *, select="*", search=None):
    params = []
    if select:
        params.append(("select", select))
    for column, value in (filters or {}).items():
        params.append((column, _filter_value(value)))
    if search is not None:
        column, term = search
        params.append((column, _search_pattern(term)))
    if order_by is not None:
        params.append(("order", "{}.{}".format(order_by.column, "desc" if order_by.descending else "asc")))
    if limit is not None:
        params.append(("limit", str(int(limit))))
    return urlencode(params, quote_via=quote, safe="*,.()")


def parse_content_range_total(header_value):
    if not header_value:
        return None
    match = _CONTENT_RANGE_TOTAL_RE.search(header_value)
    if not match:
        return None
    return int(match.group(1))


def _error_message(exc):
    body = ""
    try:
        body_bytes = exc.read()
        if body_bytes:
            body = body_bytes.decode("utf-8", errors="replace").strip()
    except (OSError, ValueError):
        body = ""

    if body:
        try:
            payload = json.loads(body)
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            return "HTTP {}: {}".format(exc.code, payload["message"])
        return "HTTP {}: {}".format(exc.code, body)
    return "HTTP {}".format(exc.code)


class RestTableClient(TableClient):
    def __init__(self, base_url, api_key, *, access_token=None, timeout=15):
        self._base_url = validate_base_url(base_url)
        if not api_key:
            raise RemoteError("REST_API_KEY is not configured")
        self._api_key = api_key
        self._access_token = access_token or api_key
        self._timeout = timeout

    def _headers(self, extra=None):
        headers = {
            "apikey": self._api_key,
            "Authorization": "Bearer {}".format(self._access_token),
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _url(self, table, query=""):
        url = "{}/{}".format(self._base_url, quote(check_table(table)))
        if query:
            url = "{}?{}".format(url, query)
        return url

    def _send(self, req):
        try:
            with request.urlopen(req, timeout=self._timeout) as response:  # nosec B310
                body = response.read()
                return response.headers, body
        except error.HTTPError as exc:
            raise RemoteError(_error_message(exc)) from exc
        except error.URLError as exc:
            raise RemoteError("Table API unreachable: {}".format(exc.reason)) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise RemoteError("Table API request failed: {}".format(str(exc) or type(exc).__name__)) from exc

    def _get_json(self, url):
        _headers, body = self._send(request.Request(url, method="GET", headers=self._headers()))
        if not body:
            return []
        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as exc:
            raise RemoteError("Table API returned invalid JSON") from exc

    def _list_json(self, url):
        rows = self._get_json(url)
        if not isinstance(rows, list):
            raise RemoteError("Table API returned an unexpected payload")
        return rows

    def _list_sync(self, table, filters, order_by, limit):
        return self._list_json(self._url(table, build_query(filters, order_by, limit)))

    def _insert_sync(self, table, record):
        payload = json.dumps([dict(record)], default=str).encode("utf-8")
        req = request.Request(
            self._url(table),
            data=payload,
            method="POST",
            headers=self._headers(
                {"Content-Type": "application/json", "Prefer": "return=representation"}
            ),
        )
        _headers, body = self._send(req)
        try:
            rows = json.loads(body.decode("utf-8")) if body else []
        except ValueError as exc:
            raise RemoteError("Table API returned invalid JSON") from exc
        if not isinstance(rows, list) or len(rows) != 1:
            raise RemoteError("Insert into {} did not return the stored row".format(table))
        return rows[0]

    def _count_sync(self, table, filters):
        req = request.Request(
            self._url(table, build_query(filters)),
            method="HEAD",
            headers=self._headers({"Prefer": "count=exact"}),
        )
        headers, _body = self._send(req)
        total = parse_content_range_total(headers.get("Content-Range"))
        if total is None:
            raise RemoteError("Table API did not report a row count for {}".format(table))
        return total

    def _search_sync(self, table, column, term, limit):
        if "*" not in term:
            query = build_query(order_by=OrderBy(column), limit=limit, search=(column, term))
            return self._list_json(self._url(table, query))

        # The server pattern is wider than the term here; match and limit locally.
        query = build_query(order_by=OrderBy(column), search=(column, term))
        needle = term.lower()
        rows = [
            row
            for row in self._list_json(self._url(table, query))
            if needle in str(row.get(column) or "").lower()
        ]
        return rows if limit is None else rows[:limit]

    async def _call(self, operation, table, fn, *args):
        try:
            return await run_in_threadpool(fn, table, *args)
        except RemoteError as exc:
            logger.warning("%s on %s failed: %s", operation, table, exc.message, extra={"table": table})
            raise

    async def list(
        self,
        table: str,
        filters: Optional[Filters] = None,
        order_by: Optional[OrderBy] = None,
        *,
        limit: Optional[int] = None,
    ) -> Sequence[Row]:
        return await self._call("list", table, self._list_sync, filters, order_by, limit)

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        return await self._call("insert", table, self._insert_sync, record)

    async def count(self, table: str, filters: Optional[Filters] = None) -> int:
        return await self._call("count", table, self._count_sync, filters)

    async def search(
        self,
        table: str,
        column: str,
        term: str,
        *,
        limit: Optional[int] = None,
    ) -> Sequence[Row]:
        return await self._call("search", table, self._search_sync, column, term, limit)


__all__ = ["RestTableClient", "build_query", "parse_content_range_total", "validate_base_url"]
