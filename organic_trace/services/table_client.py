"""Query façade: the uniform way every view reads and writes hosted tables.

Rows are plain dicts. Filters are exact-match only, ordering is on a single
column. Any backend failure surfaces as :class:`RemoteError`; the façade never
retries and never partially applies an insert.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from organic_trace.core.constants import TABLES
from organic_trace.core.errors import RemoteError

Row = Dict[str, Any]
Filters = Mapping[str, Any]


@dataclass(frozen=True)
class OrderBy:
    column: str
    descending: bool = False


def newest_first(column: str = "created_at") -> OrderBy:
    return OrderBy(column, descending=True)


def oldest_first(column: str) -> OrderBy:
    return OrderBy(column, descending=False)


def check_table(table: str) -> str:
    if table not in TABLES:
        raise RemoteError("Unknown table: {}".format(table))
    return table


class TableClient:
    async def list(
        self,
        table: str,
        filters: Optional[Filters] = None,
        order_by: Optional[OrderBy] = None,
        *,
        limit: Optional[int] = None,
    ) -> Sequence[Row]:
        raise NotImplementedError

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        raise NotImplementedError

    async def count(self, table: str, filters: Optional[Filters] = None) -> int:
        raise NotImplementedError

    async def search(
        self,
        table: str,
        column: str,
        term: str,
        *,
        limit: Optional[int] = None,
    ) -> Sequence[Row]:
        """Case-insensitive substring match of ``term`` against ``column``."""
        raise NotImplementedError


__all__ = ["Filters", "OrderBy", "Row", "TableClient", "check_table", "newest_first", "oldest_first"]
