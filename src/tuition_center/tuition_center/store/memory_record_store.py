from __future__ import annotations

import copy
import uuid
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from .record_store import CREATED_AT, RecordStore, WriteOp, require_field_name, strip_reserved


class InMemoryRecordStore(RecordStore):
    """Process-local store for development and tests.

    Records are copied on the way in and out so callers never share state with
    the store.
    """

    def __init__(self, *, clock: Optional[Callable[[], datetime]] = None):
        self._collections: dict[str, dict[str, dict]] = {}
        self._clock = clock or now_local

    def _stamp(self, record: dict) -> dict:
        data = copy.deepcopy(strip_reserved(record))
        data[CREATED_AT] = self._clock().isoformat()
        return data

    @staticmethod
    def _out(record_id: str, data: dict) -> dict:
        out = copy.deepcopy(data)
        out["id"] = record_id
        return out

    def _rows(self, collection: str) -> dict[str, dict]:
        return self._collections.setdefault(collection, {})

    @staticmethod
    def _sorted(rows: list[dict], order_by: Optional[str], descending: bool) -> list[dict]:
        if not order_by:
            return rows
        require_field_name(order_by)
        present = [r for r in rows if r.get(order_by) is not None]
        missing = [r for r in rows if r.get(order_by) is None]
        present.sort(key=lambda r: r[order_by], reverse=descending)
        return present + missing

    def insert(self, collection: str, record: dict) -> str:
        record_id = uuid.uuid4().hex
        self._rows(collection)[record_id] = self._stamp(record)
        return record_id

    def insert_idempotent(self, collection: str, key: str, record: dict) -> str:
        self._rows(collection)[str(key)] = self._stamp(record)
        return str(key)

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        data = self._rows(collection).get(str(record_id))
        if data is None:
            return None
        return self._out(str(record_id), data)

    def update(self, collection: str, record_id: str, changes: dict) -> bool:
        rows = self._rows(collection)
        if str(record_id) not in rows:
            return False
        rows[str(record_id)].update(copy.deepcopy(strip_reserved(changes)))
        return True

    def delete(self, collection: str, record_id: str) -> bool:
        return self._rows(collection).pop(str(record_id), None) is not None

    def query_equal(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        require_field_name(field_name)
        rows = [self._out(k, v) for k, v in self._rows(collection).items() if v.get(field_name) == value]
        return self._sorted(rows, order_by, descending)

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
        require_field_name(field_name)
        rows = [
            self._out(k, v)
            for k, v in self._rows(collection).items()
            if v.get(field_name) is not None and str(low) <= str(v[field_name]) <= str(high)
        ]
        return self._sorted(rows, order_by, descending)

    def list_all(self, collection: str, *, order_by: Optional[str] = None, descending: bool = False) -> Sequence[dict]:
        rows = [self._out(k, v) for k, v in self._rows(collection).items()]
        return self._sorted(rows, order_by, descending)

    def batch_write(self, ops: Sequence[WriteOp]) -> list[str]:
        # Stage on a copy; swap in only when every op went through.
        staged = {name: dict(rows) for name, rows in self._collections.items()}
        ids: list[str] = []
        for op in ops:
            record_id = str(op.key) if op.key is not None else uuid.uuid4().hex
            staged.setdefault(op.collection, {})[record_id] = self._stamp(op.record)
            ids.append(record_id)
        self._collections = staged
        return ids
