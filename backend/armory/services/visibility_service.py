# Overview: Role-scoped visibility predicates shared by the read and write paths.

from __future__ import annotations

from ..permissions import VIEW_PERMISSION_BY_KIND, role_has_permission
from ..records import Assignment, Purchase, RecordKind, Role, Transfer, Viewer
"""
Visibility Rules (authoritative)

- Admin and Logistics Officer see every base.
- A Base Commander sees only their home base:
    Purchase / Assignment: record.base == home_base
    Transfer: from_base == home_base OR to_base == home_base
- Write path: a Base Commander files records only under their home base
  (Transfer: from_base). See owning_base().
- All functions here are pure.
"""


def permits(viewer: Viewer, base: str | None) -> bool:
    """Whether the viewer may see records filed under `base`."""
    if viewer.role != Role.BASE_COMMANDER:
        return True
    return base is not None and base == viewer.home_base


def permits_transfer(viewer: Viewer, transfer: Transfer) -> bool:
    """A commander sees inbound and outbound movement touching their base."""
    return permits(viewer, transfer.from_base) or permits(viewer, transfer.to_base)


def permits_record(viewer: Viewer, record) -> bool:
    if isinstance(record, Transfer):
        return permits_transfer(viewer, record)
    if isinstance(record, (Purchase, Assignment)):
        return permits(viewer, record.base)
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def visible(viewer: Viewer, records) -> list:
    """Records the viewer may see, insertion order preserved."""
    return [record for record in records if permits_record(viewer, record)]


def can_list(viewer: Viewer, kind) -> bool:
    """Listing eligibility per record kind."""
    return role_has_permission(viewer.role, VIEW_PERMISSION_BY_KIND[RecordKind.coerce(kind)])


def owning_base(kind, payload) -> str | None:
    """The base a new record is filed under: base, or from_base for a Transfer."""
    kind = RecordKind.coerce(kind)
    if isinstance(payload, (Purchase, Transfer, Assignment)):
        return payload.from_base if kind == RecordKind.TRANSFER else payload.base
    if kind == RecordKind.TRANSFER:
        return payload.get("from_base") or payload.get("fromBase")
    return payload.get("base")
