# Overview: Append-only storage for Purchase, Transfer and Assignment records.

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import replace

from ..extensions import db
from ..models import AssignmentRow, PurchaseRow, TransferRow
from ..records import Assignment, Purchase, RecordKind, Transfer
from .concurrency import run_with_retry
"""
Record Store Invariants (authoritative)

- Append-only: no update or delete operation exists.
- append() assigns the next id of the record's own collection and stores the
  record in one atomic step; it returns the stored (id-bearing) record.
- Ids start at 1 and increase by one per collection.
- Reads are full scans in insertion order and return immutable snapshots;
  a reader never observes a partially appended record.
"""


class RecordStoreError(Exception):
    """Raised when a record cannot be stored."""
    pass


_KIND_BY_TYPE = {
    Purchase: RecordKind.PURCHASE,
    Transfer: RecordKind.TRANSFER,
    Assignment: RecordKind.ASSIGNMENT,
}


def kind_of(record) -> RecordKind:
    kind = _KIND_BY_TYPE.get(type(record))
    if kind is None:
        raise RecordStoreError(f"Unsupported record type: {type(record).__name__}")
    return kind


class RecordStore(ABC):
    """Owned collections of movement records plus an atomic append-with-id."""

    backend = "abstract"

    @abstractmethod
    def append(self, draft):
        """Store an id-less draft; return the stored record carrying its new id."""

    @abstractmethod
    def records(self, kind) -> tuple:
        """All records of one kind, insertion order."""

    def purchases(self) -> tuple[Purchase, ...]:
        return self.records(RecordKind.PURCHASE)

    def transfers(self) -> tuple[Transfer, ...]:
        return self.records(RecordKind.TRANSFER)

    def assignments(self) -> tuple[Assignment, ...]:
        return self.records(RecordKind.ASSIGNMENT)

    def counts(self) -> dict:
        return {kind.value: len(self.records(kind)) for kind in RecordKind}


class InMemoryRecordStore(RecordStore):
    """
    Process-local store.

    One lock per collection serializes id assignment with the list append.
    """

    backend = "memory"

    def __init__(self):
        self._collections = {kind: [] for kind in RecordKind}
        self._locks = {kind: threading.Lock() for kind in RecordKind}

    def append(self, draft):
        kind = kind_of(draft)
        if draft.id is not None:
            raise RecordStoreError(f"{kind.value} {draft.id} is already stored")

        with self._locks[kind]:
            collection = self._collections[kind]
            record = replace(draft, id=len(collection) + 1)
            collection.append(record)
        return record

    def records(self, kind) -> tuple:
        kind = RecordKind.coerce(kind)
        with self._locks[kind]:
            return tuple(self._collections[kind])

    def clear(self) -> None:
        """DEV/TEST only: drop every record."""
        for kind in RecordKind:
            with self._locks[kind]:
                self._collections[kind].clear()


_ROW_BY_KIND = {
    RecordKind.PURCHASE: PurchaseRow,
    RecordKind.TRANSFER: TransferRow,
    RecordKind.ASSIGNMENT: AssignmentRow,
}


class SqlRecordStore(RecordStore):
    """
    Flask-SQLAlchemy backed store. Requires an application context.

    Ids come from the table's autoincrement key, so each collection keeps its own sequence.
    """

    backend = "sql"

    def create_schema(self) -> None:
        db.create_all()

    def append(self, draft):
        kind = kind_of(draft)
        if draft.id is not None:
            raise RecordStoreError(f"{kind.value} {draft.id} is already stored")

        row_cls = _ROW_BY_KIND[kind]

        def _op():
            row = row_cls.from_record(draft)
            db.session.add(row)
            db.session.flush()  # ensures row.id is assigned before commit
            record = row.to_record()
            db.session.commit()
            return record

        return run_with_retry(_op)

    def records(self, kind) -> tuple:
        row_cls = _ROW_BY_KIND[RecordKind.coerce(kind)]
        rows = db.session.query(row_cls).order_by(row_cls.id.asc()).all()
        return tuple(row.to_record() for row in rows)


def create_record_store(backend: str) -> RecordStore:
    if backend == InMemoryRecordStore.backend:
        return InMemoryRecordStore()
    if backend == SqlRecordStore.backend:
        return SqlRecordStore()
    raise RecordStoreError(f"Unknown record store backend: {backend!r}")
