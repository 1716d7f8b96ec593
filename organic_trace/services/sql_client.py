from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from organic_trace.core.errors import RemoteError
from organic_trace.database.base import Base
from organic_trace.models import import_all_models
from organic_trace.models._columns import new_id
from organic_trace.services.table_client import Filters, OrderBy, Row, TableClient, check_table

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"

import_all_models()


def _escape_like(term: str) -> str:
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


class SqlTableClient(TableClient):
    """Façade over the SQLAlchemy tables declared in :mod:`organic_trace.models`."""

    def __init__(self, engine):
        self._engine = engine

    def _table(self, name):
        check_table(name)
        table = Base.metadata.tables.get(name)
        if table is None:
            raise RemoteError("Unknown table: {}".format(name))
        return table

    @staticmethod
    def _column(table, name):
        column = table.c.get(name)
        if column is None:
            raise RemoteError("Unknown column {}.{}".format(table.name, name))
        return column

    def _filtered(self, stmt, table, filters):
        for column_name, value in (filters or {}).items():
            stmt = stmt.where(self._column(table, column_name) == value)
        return stmt

    def _list_sync(self, table_name, filters, order_by, limit):
        table = self._table(table_name)
        stmt = self._filtered(select(table), table, filters)
        if order_by is not None:
            column = self._column(table, order_by.column)
            stmt = stmt.order_by(column.desc() if order_by.descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._engine.connect() as conn:
            return [dict(row) for row in conn.execute(stmt).mappings().all()]

    def _insert_sync(self, table_name, record):
        table = self._table(table_name)
        values = dict(record)
        if not values.get("id"):
            values["id"] = new_id()
        with self._engine.begin() as conn:
            conn.execute(table.insert().values(**values))
            row = conn.execute(select(table).where(table.c.id == values["id"])).mappings().one()
        return dict(row)

    def _count_sync(self, table_name, filters):
        table = self._table(table_name)
        stmt = self._filtered(select(func.count()).select_from(table), table, filters)
        with self._engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def _search_sync(self, table_name, column_name, term, limit):
        table = self._table(table_name)
        column = self._column(table, column_name)
        pattern = "%{}%".format(_escape_like(term))
        stmt = select(table).where(column.ilike(pattern, escape=_LIKE_ESCAPE)).order_by(column)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._engine.connect() as conn:
            return [dict(row) for row in conn.execute(stmt).mappings().all()]

    async def _call(self, operation, table_name, fn, *args):
        try:
            return await run_in_threadpool(fn, table_name, *args)
        except SQLAlchemyError as exc:
            logger.warning("%s on %s failed: %s", operation, table_name, exc, extra={"table": table_name})
            raise RemoteError(str(exc)) from exc
        except RemoteError as exc:
            logger.warning("%s on %s rejected: %s", operation, table_name, exc.message, extra={"table": table_name})
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


__all__ = ["SqlTableClient"]
