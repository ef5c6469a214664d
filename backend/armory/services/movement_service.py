# Overview: Service-layer operations for movements; validates, appends and lists records.

from __future__ import annotations

from typing import Iterable, Optional

from ..config import Config
from ..records import Assignment, Purchase, RecordKind, ReportFilter, Transfer, Viewer
from ..validation import ForbiddenError, UnauthenticatedError
from . import filter_service, validation_service, visibility_service
from .balance_service import BalanceReport, compute_report
from .record_store import RecordStore

# Base catalog applied when a caller does not supply one
DEFAULT_BASES = tuple(Config.BASES)

__all__ = [
    "record_purchase",
    "record_transfer",
    "record_assignment",
    "record_movement",
    "compute_report",
    "list_purchases",
    "list_transfers",
    "list_assignments",
    "list_records",
    "BalanceReport",
]


def record_movement(store: RecordStore, viewer: Viewer, kind, payload, *, bases: Optional[Iterable[str]] = None):
    """
    Validate then append one record.

    Validation runs to completion before the store is touched, so a rejected
    payload never leaves a partial record behind. Bases are checked against
    `bases`, or DEFAULT_BASES when None.
    """
    if bases is None:
        bases = DEFAULT_BASES
    draft = validation_service.validate(viewer, kind, payload, bases=bases)
    return store.append(draft)


def record_purchase(store: RecordStore, viewer: Viewer, payload, *, bases=None) -> Purchase:
    return record_movement(store, viewer, RecordKind.PURCHASE, payload, bases=bases)


def record_transfer(store: RecordStore, viewer: Viewer, payload, *, bases=None) -> Transfer:
    return record_movement(store, viewer, RecordKind.TRANSFER, payload, bases=bases)


def record_assignment(store: RecordStore, viewer: Viewer, payload, *, bases=None) -> Assignment:
    return record_movement(store, viewer, RecordKind.ASSIGNMENT, payload, bases=bases)


def list_records(store: RecordStore, viewer: Viewer, kind, report_filter: ReportFilter | None = None) -> list:
    """
    Records of one kind the viewer may see and that match the filter, insertion order.

    Raises:
        UnauthenticatedError: viewer is None
        ForbiddenError: the viewer's role may not list this kind
    """
    if viewer is None:
        raise UnauthenticatedError("A resolvable viewer is required")
    kind = RecordKind.coerce(kind)
    if not visibility_service.can_list(viewer, kind):
        raise ForbiddenError(f"{viewer.role.value} cannot view {kind.value}s")

    records = visibility_service.visible(viewer, store.records(kind))
    return filter_service.select(records, report_filter)


def list_purchases(store: RecordStore, viewer: Viewer, report_filter: ReportFilter | None = None) -> list[Purchase]:
    return list_records(store, viewer, RecordKind.PURCHASE, report_filter)


def list_transfers(store: RecordStore, viewer: Viewer, report_filter: ReportFilter | None = None) -> list[Transfer]:
    return list_records(store, viewer, RecordKind.TRANSFER, report_filter)


def list_assignments(store: RecordStore, viewer: Viewer, report_filter: ReportFilter | None = None) -> list[Assignment]:
    return list_records(store, viewer, RecordKind.ASSIGNMENT, report_filter)
