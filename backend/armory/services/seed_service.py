# Overview: Demo movements for local runs and the CLI.

from __future__ import annotations

from datetime import date

from ..records import Assignment, AssignmentStatus, EquipmentType, Purchase, Transfer
from .record_store import RecordStore


def demo_movements() -> list:
    """The dashboard demo set: two purchases, one transfer, one assignment, one expenditure."""
    return [
        Purchase(date=date(2024, 6, 1), base="Base Alpha", equipment_type=EquipmentType.WEAPONS, quantity=10),
        Purchase(date=date(2024, 6, 3), base="Base Bravo", equipment_type=EquipmentType.VEHICLES, quantity=5),
        Transfer(
            date=date(2024, 6, 4),
            from_base="Base Alpha",
            to_base="Base Bravo",
            equipment_type=EquipmentType.WEAPONS,
            quantity=3,
        ),
        Assignment(
            date=date(2024, 6, 5),
            base="Base Bravo",
            equipment_type=EquipmentType.WEAPONS,
            quantity=2,
            status=AssignmentStatus.ASSIGNED,
            personnel="Captain Smith",
        ),
        Assignment(
            date=date(2024, 6, 6),
            base="Base Bravo",
            equipment_type=EquipmentType.WEAPONS,
            quantity=1,
            status=AssignmentStatus.EXPENDED,
        ),
    ]


def seed_demo_movements(store: RecordStore) -> dict:
    """
    Append the demo set to an empty store.

    Safe to call repeatedly (idempotent): a store holding any record is left untouched.
    Returns the store's record counts.
    """
    if any(store.counts().values()):
        return store.counts()

    for draft in demo_movements():
        store.append(draft)
    return store.counts()
