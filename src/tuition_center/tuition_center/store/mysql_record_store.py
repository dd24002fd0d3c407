from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import now_local
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .record_store import CREATED_AT, RecordStore, WriteOp, require_field_name, strip_reserved

logger = logging.getLogger(__name__)

_UPSERT_SQL = """
    INSERT INTO documents(collection, doc_id, data, created_at)
    VALUES(%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE data=VALUES(data), created_at=VALUES(created_at)
"""

_INSERT_SQL = """
    INSERT INTO documents(collection, doc_id, data, created_at)
    VALUES(%s,%s,%s,%s)
"""


def _json_path(field_name: str) -> str:
    return f"$.{require_field_name(field_name)}"


def _load(value) -> dict:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    return dict(value or {})


class MySQLRecordStore(RecordStore):
    """Document store on a single MySQL `documents` table (JSON column per record)."""

    def __init__(self, conn_factory: DatabaseConnection, *, clock: Optional[Callable[[], datetime]] = None):
        self._conn_factory = conn_factory
        self._clock = clock or now_local

    def _stamp(self, record: dict) -> tuple[str, datetime]:
        created_at = self._clock()
        data = strip_reserved(record)
        data[CREATED_AT] = created_at.isoformat()
        return json.dumps(data, default=str), created_at

    @staticmethod
    def _to_record(r: dict) -> dict:
        out = _load(r["data"])
        out["id"] = r["doc_id"]
        return out

    @staticmethod
    def _order_clause(order_by: Optional[str], descending: bool) -> tuple[str, list[object]]:
        if not order_by:
            return "", []
        direction = "DESC" if descending else "ASC"
        if order_by == CREATED_AT:
            return f" ORDER BY created_at {direction}", []
        return f" ORDER BY JSON_EXTRACT(data, %s) {direction}", [_json_path(order_by)]

    def _select(self, where: str, params: list[object], order_by: Optional[str], descending: bool) -> list[dict]:
        order_sql, order_params = self._order_clause(order_by, descending)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"SELECT doc_id, data FROM documents WHERE {where}{order_sql}",
                    tuple(params + order_params),
                )
                return [self._to_record(r) for r in fetchall(cur)]
        except mysql.connector.Error as e:
            logger.error("Document query failed: %s", where, exc_info=True)
            raise StoreError("Could not read from the record store") from e

    def insert(self, collection: str, record: dict) -> str:
        return self.batch_write([WriteOp(collection, None, record)])[0]

    def insert_idempotent(self, collection: str, key: str, record: dict) -> str:
        return self.batch_write([WriteOp(collection, str(key), record)])[0]

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        rows = self._select("collection=%s AND doc_id=%s", [collection, str(record_id)], None, False)
        return rows[0] if rows else None

    def update(self, collection: str, record_id: str, changes: dict) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT doc_id, data FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (collection, str(record_id)),
                )
                r = fetchone(cur)
                if not r:
                    return False
                data = _load(r["data"])
                data.update(strip_reserved(changes))
                cur.execute(
                    "UPDATE documents SET data=%s WHERE collection=%s AND doc_id=%s",
                    (json.dumps(data, default=str), collection, str(record_id)),
                )
                return True
        except mysql.connector.Error as e:
            logger.error("Update of %s/%s failed", collection, record_id, exc_info=True)
            raise StoreError("Could not write to the record store") from e

    def delete(self, collection: str, record_id: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "DELETE FROM documents WHERE collection=%s AND doc_id=%s",
                    (collection, str(record_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            logger.error("Delete of %s/%s failed", collection, record_id, exc_info=True)
            raise StoreError("Could not write to the record store") from e

    def query_equal(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        return self._select(
            "collection=%s AND JSON_EXTRACT(data, %s) = CAST(%s AS JSON)",
            [collection, _json_path(field_name), json.dumps(value)],
            order_by,
            descending,
        )

    def query_range(
        self,
        collection: str,
        field_name: str,
        low: str,
        high: str,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        return self._select(
            "collection=%s AND JSON_UNQUOTE(JSON_EXTRACT(data, %s)) BETWEEN %s AND %s",
            [collection, _json_path(field_name), str(low), str(high)],
            order_by,
            descending,
        )

    def list_all(self, collection: str, *, order_by: Optional[str] = None, descending: bool = False) -> Sequence[dict]:
        return self._select("collection=%s", [collection], order_by, descending)

    def batch_write(self, ops: Sequence[WriteOp]) -> list[str]:
        ids: list[str] = []
        try:
            # One connection, one commit: the whole batch lands or none of it.
            with db_cursor(self._conn_factory) as (_, cur):
                for op in ops:
                    payload, created_at = self._stamp(op.record)
                    if op.key is None:
                        record_id = uuid.uuid4().hex
                        cur.execute(_INSERT_SQL, (op.collection, record_id, payload, created_at))
                    else:
                        record_id = str(op.key)
                        cur.execute(_UPSERT_SQL, (op.collection, record_id, payload, created_at))
                    ids.append(record_id)
        except mysql.connector.Error as e:
            logger.error("Batch write of %d document(s) failed", len(ops), exc_info=True)
            raise StoreError("Could not write to the record store") from e
        return ids
