# Overview: Immutable movement records, viewer identity and report filter value objects.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from armory.time_utils import parse_iso_date, to_iso_date
from armory.validation import MAX_QUANTITY, InvalidInputError
"""
Ledger Record Invariants (authoritative)

- Purchase, Transfer and Assignment records are immutable once appended.
- quantity is an integer in 1..MAX_QUANTITY.
- Ids are assigned by the record store, sequentially, per collection.
  A Purchase and a Transfer may share an id.
- Transfer.from_base != Transfer.to_base.
- Assignment.status == ASSIGNED  => personnel is a non-empty string.
- Assignment.status == EXPENDED  => personnel is None.
- A record with id None is a draft: validated, not yet stored.

quantity, same-base and personnel rules are enforced on construction, so every
store backend admits the same records.
"""


def _normalize(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


class _LookupEnum(str, Enum):
    @classmethod
    def coerce(cls, value):
        """Accept a member, its value, or its name in any case/spacing ("base_commander")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = _normalize(value)
            for member in cls:
                if wanted in (_normalize(member.value), _normalize(member.name)):
                    return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")


class Role(_LookupEnum):
    ADMIN = "Admin"
    BASE_COMMANDER = "Base Commander"
    LOGISTICS_OFFICER = "Logistics Officer"


class EquipmentType(_LookupEnum):
    WEAPONS = "Weapons"
    VEHICLES = "Vehicles"
    AMMUNITION = "Ammunition"


class AssignmentStatus(_LookupEnum):
    ASSIGNED = "Assigned"
    EXPENDED = "Expended"


class RecordKind(_LookupEnum):
    PURCHASE = "purchase"
    TRANSFER = "transfer"
    ASSIGNMENT = "assignment"


def _coerce_record_fields(record) -> None:
    # Frozen dataclasses: normalize through object.__setattr__
    object.__setattr__(record, "date", parse_iso_date(record.date))
    object.__setattr__(record, "equipment_type", EquipmentType.coerce(record.equipment_type))
    if record.date is None:
        raise ValueError("date is required")
    quantity = record.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int) or not 0 < quantity <= MAX_QUANTITY:
        raise ValueError(f"quantity must be an integer between 1 and {MAX_QUANTITY}")


@dataclass(frozen=True)
class Viewer:
    """Caller identity as resolved by the identity layer."""
    username: str
    role: Role
    home_base: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "role", Role.coerce(self.role))
        if self.role == Role.BASE_COMMANDER and not self.home_base:
            raise ValueError("home_base is required for a Base Commander")

    @property
    def is_base_commander(self) -> bool:
        return self.role == Role.BASE_COMMANDER

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "role": self.role.value,
            "home_base": self.home_base,
        }


@dataclass(frozen=True)
class Purchase:
    date: date
    base: str
    equipment_type: EquipmentType
    quantity: int
    id: Optional[int] = None

    kind = RecordKind.PURCHASE

    def __post_init__(self):
        _coerce_record_fields(self)

    def __repr__(self) -> str:
        return f"<Purchase id={self.id} base={self.base!r} type={self.equipment_type.value} qty={self.quantity}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": to_iso_date(self.date),
            "base": self.base,
            "equipment_type": self.equipment_type.value,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class Transfer:
    date: date
    from_base: str
    to_base: str
    equipment_type: EquipmentType
    quantity: int
    id: Optional[int] = None

    kind = RecordKind.TRANSFER

    def __post_init__(self):
        _coerce_record_fields(self)
        if self.from_base == self.to_base:
            raise ValueError("Cannot transfer to the same base")

    def __repr__(self) -> str:
        return (
            f"<Transfer id={self.id} {self.from_base!r}->{self.to_base!r} "
            f"type={self.equipment_type.value} qty={self.quantity}>"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": to_iso_date(self.date),
            "from_base": self.from_base,
            "to_base": self.to_base,
            "equipment_type": self.equipment_type.value,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class Assignment:
    date: date
    base: str
    equipment_type: EquipmentType
    quantity: int
    status: AssignmentStatus
    personnel: Optional[str] = None
    id: Optional[int] = None

    kind = RecordKind.ASSIGNMENT

    def __post_init__(self):
        _coerce_record_fields(self)
        object.__setattr__(self, "status", AssignmentStatus.coerce(self.status))
        if self.status == AssignmentStatus.EXPENDED:
            object.__setattr__(self, "personnel", None)
        elif not (self.personnel or "").strip():
            raise ValueError("Personnel required for assignment")

    def __repr__(self) -> str:
        return (
            f"<Assignment id={self.id} base={self.base!r} status={self.status.value} "
            f"type={self.equipment_type.value} qty={self.quantity}>"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": to_iso_date(self.date),
            "base": self.base,
            "equipment_type": self.equipment_type.value,
            "quantity": self.quantity,
            "status": self.status.value,
            "personnel": self.personnel,
        }


@dataclass(frozen=True)
class ReportFilter:
    """
    Report query. Empty strings and None both mean "unset".

    date_cutoff accepts a date or an ISO "YYYY-MM-DD" string.
    """
    date_cutoff: Optional[date] = None
    base: Optional[str] = None
    equipment_type: Optional[EquipmentType] = None

    def __post_init__(self):
        object.__setattr__(self, "date_cutoff", parse_iso_date(self.date_cutoff))
        base = self.base.strip() if isinstance(self.base, str) else self.base
        object.__setattr__(self, "base", base or None)
        equipment_type = self.equipment_type
        if isinstance(equipment_type, str) and not equipment_type.strip():
            equipment_type = None
        if equipment_type is not None:
            equipment_type = EquipmentType.coerce(equipment_type)
        object.__setattr__(self, "equipment_type", equipment_type)

    @classmethod
    def from_mapping(cls, args) -> "ReportFilter":
        """Build from query-string style args (date, base, equipment_type|type|equipmentType)."""
        equipment_type = args.get("equipment_type") or args.get("type") or args.get("equipmentType")
        try:
            return cls(
                date_cutoff=args.get("date") or args.get("date_cutoff"),
                base=args.get("base"),
                equipment_type=equipment_type,
            )
        except ValueError as exc:
            raise InvalidInputError(f"Invalid report filter: {exc}")

    def to_dict(self) -> dict:
        return {
            "date": to_iso_date(self.date_cutoff),
            "base": self.base,
            "equipment_type": self.equipment_type.value if self.equipment_type else None,
        }
