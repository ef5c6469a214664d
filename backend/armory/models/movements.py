from __future__ import annotations

from ..extensions import db
from armory.records import Assignment, Purchase, Transfer


class PurchaseRow(db.Model):
    """
    Persisted Purchase.

    Append-only: rows are inserted by SqlRecordStore.append and never updated or deleted.
    """
    __tablename__ = "purchases"
    __table_args__ = (
        db.Index("ix_purchases_base_date", "base", "date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    base = db.Column(db.String(64), nullable=False)
    equipment_type = db.Column(db.String(32), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<PurchaseRow id={self.id} base={self.base!r} qty={self.quantity}>"

    @classmethod
    def from_record(cls, record: Purchase) -> "PurchaseRow":
        return cls(
            date=record.date,
            base=record.base,
            equipment_type=record.equipment_type.value,
            quantity=record.quantity,
        )

    def to_record(self) -> Purchase:
        return Purchase(
            id=self.id,
            date=self.date,
            base=self.base,
            equipment_type=self.equipment_type,
            quantity=self.quantity,
        )


class TransferRow(db.Model):
    __tablename__ = "transfers"
    __table_args__ = (
        db.CheckConstraint("from_base <> to_base", name="ck_transfers_distinct_bases"),
        db.Index("ix_transfers_from_date", "from_base", "date"),
        db.Index("ix_transfers_to_date", "to_base", "date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    from_base = db.Column(db.String(64), nullable=False)
    to_base = db.Column(db.String(64), nullable=False)
    equipment_type = db.Column(db.String(32), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<TransferRow id={self.id} {self.from_base!r}->{self.to_base!r} qty={self.quantity}>"

    @classmethod
    def from_record(cls, record: Transfer) -> "TransferRow":
        return cls(
            date=record.date,
            from_base=record.from_base,
            to_base=record.to_base,
            equipment_type=record.equipment_type.value,
            quantity=record.quantity,
        )

    def to_record(self) -> Transfer:
        return Transfer(
            id=self.id,
            date=self.date,
            from_base=self.from_base,
            to_base=self.to_base,
            equipment_type=self.equipment_type,
            quantity=self.quantity,
        )


class AssignmentRow(db.Model):
    """
    Persisted Assignment or expenditure.

    status is "Assigned" or "Expended"; personnel is only set for Assigned rows.
    """
    __tablename__ = "assignments"
    __table_args__ = (
        db.Index("ix_assignments_base_date", "base", "date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    base = db.Column(db.String(64), nullable=False)
    equipment_type = db.Column(db.String(32), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), nullable=False, index=True)
    personnel = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<AssignmentRow id={self.id} base={self.base!r} status={self.status} qty={self.quantity}>"

    @classmethod
    def from_record(cls, record: Assignment) -> "AssignmentRow":
        return cls(
            date=record.date,
            base=record.base,
            equipment_type=record.equipment_type.value,
            quantity=record.quantity,
            status=record.status.value,
            personnel=record.personnel,
        )

    def to_record(self) -> Assignment:
        return Assignment(
            id=self.id,
            date=self.date,
            base=self.base,
            equipment_type=self.equipment_type,
            quantity=self.quantity,
            status=self.status,
            personnel=self.personnel,
        )
