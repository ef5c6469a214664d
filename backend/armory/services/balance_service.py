# Overview: Balance engine; turns movement records into the role-scoped balance report.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..records import AssignmentStatus, ReportFilter, Viewer
from ..time_utils import to_iso_date
from ..validation import UnauthenticatedError
from . import visibility_service
from .filter_service import matches_equipment_type
from .record_store import RecordStore
"""
Balance Report Semantics (authoritative)

Candidates: every collection is first narrowed to what the viewer may see
(visibility_service).

No cutoff: with report_filter.date_cutoff unset every figure is 0.

With a cutoff:
- opening_balance: purchases dated strictly before the cutoff.
  Base and equipment-type filters are NOT applied.
- purchases:      purchases dated on/before the cutoff, base in scope, type matching.
- transfers_in:   transfers on/before the cutoff, type matching,
                  to_base in scope and from_base not in scope.
- transfers_out:  transfers on/before the cutoff, type matching, from_base in scope.
- assigned / expended: assignments on/before the cutoff with that status,
                  base in scope, type matching.

"In scope" means: matches report_filter.base when set, and visible to the viewer.

Identities (never computed independently):
- net_movement    = purchases + transfers_in - transfers_out
- closing_balance = opening_balance + net_movement - expended

Assigned quantity is reported but not subtracted from the balance.
"""


@dataclass(frozen=True)
class BalanceReport:
    opening_balance: int = 0
    purchases: int = 0
    transfers_in: int = 0
    transfers_out: int = 0
    assigned: int = 0
    expended: int = 0
    as_of: Optional[date] = None

    @property
    def net_movement(self) -> int:
        return self.purchases + self.transfers_in - self.transfers_out

    @property
    def closing_balance(self) -> int:
        return self.opening_balance + self.net_movement - self.expended

    def to_dict(self) -> dict:
        return {
            "as_of": to_iso_date(self.as_of),
            "opening_balance": self.opening_balance,
            "closing_balance": self.closing_balance,
            "net_movement": self.net_movement,
            "purchases": self.purchases,
            "transfers_in": self.transfers_in,
            "transfers_out": self.transfers_out,
            "assigned": self.assigned,
            "expended": self.expended,
        }


def _base_in_scope(viewer: Viewer, report_filter: ReportFilter, base: str) -> bool:
    if report_filter.base and base != report_filter.base:
        return False
    return visibility_service.permits(viewer, base)


def _sum_quantity(records) -> int:
    return sum(record.quantity for record in records)


def opening_balance(purchases, cutoff: date) -> int:
    return _sum_quantity(p for p in purchases if p.date < cutoff)


def purchases_total(viewer: Viewer, purchases, report_filter: ReportFilter) -> int:
    cutoff = report_filter.date_cutoff
    return _sum_quantity(
        p for p in purchases
        if p.date <= cutoff
        and _base_in_scope(viewer, report_filter, p.base)
        and matches_equipment_type(p, report_filter.equipment_type)
    )


def transfers_in_total(viewer: Viewer, transfers, report_filter: ReportFilter) -> int:
    cutoff = report_filter.date_cutoff
    return _sum_quantity(
        t for t in transfers
        if t.date <= cutoff
        and matches_equipment_type(t, report_filter.equipment_type)
        and _base_in_scope(viewer, report_filter, t.to_base)
        and not _base_in_scope(viewer, report_filter, t.from_base)
    )


def transfers_out_total(viewer: Viewer, transfers, report_filter: ReportFilter) -> int:
    cutoff = report_filter.date_cutoff
    return _sum_quantity(
        t for t in transfers
        if t.date <= cutoff
        and matches_equipment_type(t, report_filter.equipment_type)
        and _base_in_scope(viewer, report_filter, t.from_base)
    )


def assignments_total(viewer: Viewer, assignments, report_filter: ReportFilter, status) -> int:
    cutoff = report_filter.date_cutoff
    status = AssignmentStatus.coerce(status)
    return _sum_quantity(
        a for a in assignments
        if a.status == status
        and a.date <= cutoff
        and _base_in_scope(viewer, report_filter, a.base)
        and matches_equipment_type(a, report_filter.equipment_type)
    )


def compute_report(store: RecordStore, viewer: Viewer, report_filter: ReportFilter | None = None) -> BalanceReport:
    """
    Compute the balance report for one viewer and filter.

    Pure with respect to the store: reads a snapshot of each collection and never writes.
    """
    if viewer is None:
        raise UnauthenticatedError("A resolvable viewer is required")

    report_filter = report_filter or ReportFilter()
    cutoff = report_filter.date_cutoff
    if cutoff is None:
        return BalanceReport()

    purchases = visibility_service.visible(viewer, store.purchases())
    transfers = visibility_service.visible(viewer, store.transfers())
    assignments = visibility_service.visible(viewer, store.assignments())

    return BalanceReport(
        opening_balance=opening_balance(purchases, cutoff),
        purchases=purchases_total(viewer, purchases, report_filter),
        transfers_in=transfers_in_total(viewer, transfers, report_filter),
        transfers_out=transfers_out_total(viewer, transfers, report_filter),
        assigned=assignments_total(viewer, assignments, report_filter, AssignmentStatus.ASSIGNED),
        expended=assignments_total(viewer, assignments, report_filter, AssignmentStatus.EXPENDED),
        as_of=cutoff,
    )
