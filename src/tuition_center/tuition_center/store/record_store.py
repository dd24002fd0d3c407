from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence

from ..core.exceptions import ValidationError

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

CREATED_AT = "createdAt"


@dataclass(frozen=True)
class WriteOp:
    """One document write inside a batch.

    `key=None` asks the store to generate a new id (plain insert); any other
    value is an idempotent upsert on that key.
    """

    collection: str
    key: Optional[str]
    record: dict = field(default_factory=dict)


def require_field_name(name: str) -> str:
    """Field names end up in JSON paths, so only plain identifiers are allowed."""
    if not isinstance(name, str) or not _FIELD_RE.match(name):
        raise ValidationError(f"Invalid field name: {name!r}")
    return name


def strip_reserved(record: dict) -> dict:
    """Drop the keys the store owns (`id`, `createdAt`) from an incoming record."""
    return {k: v for k, v in record.items() if k not in ("id", CREATED_AT)}


class RecordStore(Protocol):
    """Document store interface used by every repository.

    Records come back as plain dicts carrying their `id` and `createdAt`.
    Transport failures raise StoreError; nothing is retried automatically.
    """

    def insert(self, collection: str, record: dict) -> str:
        raise NotImplementedError

    def insert_idempotent(self, collection: str, key: str, record: dict) -> str:
        """Create or overwrite the record stored under a deterministic key."""

        raise NotImplementedError

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        raise NotImplementedError

    def update(self, collection: str, record_id: str, changes: dict) -> bool:
        """Merge `changes` into an existing record. Returns False if it is missing."""

        raise NotImplementedError

    def delete(self, collection: str, record_id: str) -> bool:
        raise NotImplementedError

    def query_equal(
        self,
        collection: str,
        field_name: str,
        value: Any,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Sequence[dict]:
        raise NotImplementedError

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
        """Inclusive string range, meant for ISO date fields."""

        raise NotImplementedError

    def list_all(self, collection: str, *, order_by: Optional[str] = None, descending: bool = False) -> Sequence[dict]:
        raise NotImplementedError

    def batch_write(self, ops: Sequence[WriteOp]) -> list[str]:
        """Apply every op or none of them. Returns the ids in op order."""

        raise NotImplementedError
