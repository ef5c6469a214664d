# Overview: Mutation validator; admits new movement records into the store.

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Optional

from ..permissions import RECORD_PERMISSION_BY_KIND, role_has_permission
from ..records import (
    Assignment,
    AssignmentStatus,
    EquipmentType,
    Purchase,
    RecordKind,
    Transfer,
    Viewer,
)
from ..validation import (
    ForbiddenError,
    InvalidInputError,
    UnauthenticatedError,
    coerce_choice,
    coerce_date,
    coerce_quantity,
    coerce_text,
    is_blank,
    pick,
)
from . import visibility_service
"""
Mutation Rules (authoritative). Checked in this order; the first failure wins.

1. Role eligibility (Forbidden)
   Purchase: Admin, Base Commander, Logistics Officer.
   Transfer, Assignment: Admin, Base Commander.
2. Field completeness (InvalidInput)
   Every required field present and non-empty; quantity a positive integer;
   date a calendar date; equipment type known; base(s) in the catalog when one is given.
3. Kind-specific (InvalidInput)
   Transfer: from_base != to_base.
   Assignment: status in {Assigned, Expended}; Assigned requires personnel.
4. Base ownership (Forbidden)
   visibility_service.permits(viewer, owning_base): base (Transfer: from_base) must be visible.

validate() never touches the store. It returns an id-less draft; the record
store assigns the id on append.
"""


REQUIRED_FIELDS = {
    RecordKind.PURCHASE: ("date", "base", "equipment_type", "quantity"),
    RecordKind.TRANSFER: ("date", "from_base", "to_base", "equipment_type", "quantity"),
    RecordKind.ASSIGNMENT: ("date", "base", "equipment_type", "quantity", "status"),
}

# Canonical field -> accepted payload keys (snake_case first, then the camelCase wire names)
FIELD_ALIASES = {
    "date": ("date",),
    "base": ("base",),
    "from_base": ("from_base", "fromBase"),
    "to_base": ("to_base", "toBase"),
    "equipment_type": ("equipment_type", "equipmentType", "type"),
    "quantity": ("quantity",),
    "status": ("status",),
    "personnel": ("personnel",),
}


def normalize_payload(kind, payload) -> dict:
    """Canonical-key view of a payload; unknown keys are dropped."""
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Payload must be an object")
    fields = REQUIRED_FIELDS[RecordKind.coerce(kind)] + ("personnel",)
    return {name: pick(payload, *FIELD_ALIASES[name]) for name in fields}


def check_role(viewer: Viewer, kind: RecordKind) -> None:
    if viewer is None:
        raise UnauthenticatedError("A resolvable viewer is required")
    if not role_has_permission(viewer.role, RECORD_PERMISSION_BY_KIND[kind]):
        raise ForbiddenError(f"{viewer.role.value} cannot record {kind.value}s")


def check_complete(kind: RecordKind, fields: dict, *, bases: Optional[Iterable[str]] = None) -> dict:
    """Presence and type checks. Returns the coerced field values."""
    missing = [name for name in REQUIRED_FIELDS[kind] if is_blank(fields.get(name))]
    if missing:
        raise InvalidInputError(f"Missing fields: {', '.join(missing)}", field=missing[0])

    cleaned = dict(fields)
    cleaned["date"] = coerce_date(fields["date"])
    cleaned["quantity"] = coerce_quantity(fields["quantity"])

    try:
        cleaned["equipment_type"] = EquipmentType.coerce(fields["equipment_type"])
    except ValueError:
        raise InvalidInputError(
            f"equipment_type must be one of: {', '.join(t.value for t in EquipmentType)}",
            field="equipment_type",
        )

    base_fields = ("from_base", "to_base") if kind == RecordKind.TRANSFER else ("base",)
    for name in base_fields:
        if bases is not None:
            cleaned[name] = coerce_choice(fields[name], bases, field=name)
        else:
            cleaned[name] = coerce_text(fields[name])

    cleaned["personnel"] = coerce_text(fields.get("personnel"))
    return cleaned


def check_kind_rules(kind: RecordKind, cleaned: dict) -> dict:
    if kind == RecordKind.TRANSFER:
        if cleaned["from_base"] == cleaned["to_base"]:
            raise InvalidInputError("Cannot transfer to the same base", field="to_base")

    if kind == RecordKind.ASSIGNMENT:
        try:
            status = AssignmentStatus.coerce(cleaned["status"])
        except ValueError:
            raise InvalidInputError(
                f"status must be one of: {', '.join(s.value for s in AssignmentStatus)}",
                field="status",
            )
        cleaned["status"] = status
        if status == AssignmentStatus.ASSIGNED and not cleaned["personnel"]:
            raise InvalidInputError("Personnel required for assignment", field="personnel")
        if status == AssignmentStatus.EXPENDED:
            # Expended equipment is not held by anyone
            cleaned["personnel"] = None

    return cleaned


def check_base_ownership(viewer: Viewer, kind: RecordKind, cleaned: dict) -> None:
    """The record's owning base must be visible to the viewer (same predicate as reads)."""
    if visibility_service.permits(viewer, visibility_service.owning_base(kind, cleaned)):
        return
    if kind == RecordKind.TRANSFER:
        raise ForbiddenError("Base Commander can only transfer from their base", field="from_base")
    raise ForbiddenError(f"Base Commander can only record {kind.value}s for their base", field="base")


def build_draft(kind: RecordKind, cleaned: dict):
    if kind == RecordKind.PURCHASE:
        return Purchase(
            date=cleaned["date"],
            base=cleaned["base"],
            equipment_type=cleaned["equipment_type"],
            quantity=cleaned["quantity"],
        )
    if kind == RecordKind.TRANSFER:
        return Transfer(
            date=cleaned["date"],
            from_base=cleaned["from_base"],
            to_base=cleaned["to_base"],
            equipment_type=cleaned["equipment_type"],
            quantity=cleaned["quantity"],
        )
    return Assignment(
        date=cleaned["date"],
        base=cleaned["base"],
        equipment_type=cleaned["equipment_type"],
        quantity=cleaned["quantity"],
        status=cleaned["status"],
        personnel=cleaned["personnel"],
    )


def validate(viewer: Viewer, kind, payload, *, bases: Optional[Iterable[str]] = None):
    """
    Validate a new-record payload for the viewer.

    Args:
        viewer: Caller identity (None raises UnauthenticatedError)
        kind: RecordKind or its name ("purchase", "transfer", "assignment")
        payload: dict of fields; snake_case or camelCase wire names
        bases: Optional base catalog; when given, every base must be a member

    Returns:
        An id-less Purchase, Transfer or Assignment draft

    Raises:
        ForbiddenError: role or base-ownership violation
        InvalidInputError: missing/invalid field or kind-specific rule violation
    """
    kind = RecordKind.coerce(kind)
    check_role(viewer, kind)
    fields = normalize_payload(kind, payload)
    cleaned = check_complete(kind, fields, bases=list(bases) if bases is not None else None)
    cleaned = check_kind_rules(kind, cleaned)
    check_base_ownership(viewer, kind, cleaned)
    return build_draft(kind, cleaned)
