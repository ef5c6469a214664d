"""
Record store tests for the in-memory and SQL backends.
"""

import threading
from datetime import date

import pytest

from armory.extensions import get_record_store
from armory.records import Assignment, EquipmentType, Purchase, RecordKind, Transfer
from armory.services.record_store import (
    InMemoryRecordStore,
    RecordStoreError,
    SqlRecordStore,
    create_record_store,
)
from armory.validation import MAX_QUANTITY


def _purchase(qty=1, base="Base Alpha"):
    return Purchase(date=date(2024, 6, 1), base=base, equipment_type=EquipmentType.WEAPONS, quantity=qty)


def _transfer(qty=1):
    return Transfer(
        date=date(2024, 6, 2),
        from_base="Base Alpha",
        to_base="Base Bravo",
        equipment_type=EquipmentType.VEHICLES,
        quantity=qty,
    )


def _expended(qty=1):
    return Assignment(
        date=date(2024, 6, 3),
        base="Base Bravo",
        equipment_type=EquipmentType.AMMUNITION,
        quantity=qty,
        status="Expended",
    )


# =============================================================================
# IN-MEMORY
# =============================================================================


class TestInMemoryRecordStore:
    def test_ids_sequential_per_collection(self, store):
        first = store.append(_purchase())
        second = store.append(_purchase())
        transfer = store.append(_transfer())

        assert (first.id, second.id) == (1, 2)
        # Ids are scoped to their own collection
        assert transfer.id == 1

    def test_append_returns_stored_record(self, store):
        draft = _purchase(qty=4)
        stored = store.append(draft)
        assert draft.id is None
        assert stored.quantity == 4
        assert store.purchases() == (stored,)

    def test_already_stored_record_rejected(self, store):
        stored = store.append(_purchase())
        with pytest.raises(RecordStoreError):
            store.append(stored)
        assert len(store.purchases()) == 1

    def test_unsupported_record(self, store):
        with pytest.raises(RecordStoreError):
            store.append({"quantity": 1})

    def test_reads_are_snapshots(self, store):
        store.append(_purchase())
        snapshot = store.purchases()
        store.append(_purchase())
        assert len(snapshot) == 1
        assert isinstance(snapshot, tuple)

    def test_insertion_order(self, store):
        for qty in (5, 3, 8):
            store.append(_purchase(qty=qty))
        assert [p.quantity for p in store.purchases()] == [5, 3, 8]

    def test_records_by_kind_name(self, store):
        store.append(_expended())
        assert store.records("assignment") == store.assignments()
        assert store.records(RecordKind.ASSIGNMENT)[0].personnel is None

    def test_concurrent_appends_get_unique_sequential_ids(self, store):
        threads_count, per_thread = 8, 200
        barrier = threading.Barrier(threads_count)

        def worker():
            barrier.wait()
            for _ in range(per_thread):
                store.append(_purchase())

        threads = [threading.Thread(target=worker) for _ in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [p.id for p in store.purchases()]
        assert ids == list(range(1, threads_count * per_thread + 1))

    def test_counts_and_clear(self, store):
        store.append(_purchase())
        store.append(_transfer())
        assert store.counts() == {"purchase": 1, "transfer": 1, "assignment": 0}
        store.clear()
        assert store.counts() == {"purchase": 0, "transfer": 0, "assignment": 0}
        assert store.append(_purchase()).id == 1


# =============================================================================
# SQL
# =============================================================================


class TestSqlRecordStore:
    def test_app_uses_sql_backend(self, sql_app):
        assert isinstance(get_record_store(), SqlRecordStore)

    def test_round_trip(self, sql_app):
        store = get_record_store()
        purchase = store.append(_purchase(qty=10))
        transfer = store.append(_transfer(qty=3))
        expended = store.append(_expended(qty=1))

        assert purchase.id == 1
        assert transfer.id == 1
        assert expended.id == 1
        assert store.purchases() == (purchase,)
        assert store.transfers()[0].to_base == "Base Bravo"
        assert store.assignments()[0].equipment_type == EquipmentType.AMMUNITION

    def test_ids_sequential(self, sql_app):
        store = get_record_store()
        ids = [store.append(_purchase(qty=q)).id for q in (1, 2, 3)]
        assert ids == [1, 2, 3]
        assert [p.quantity for p in store.purchases()] == [1, 2, 3]

    def test_already_stored_record_rejected(self, sql_app):
        store = get_record_store()
        stored = store.append(_purchase())
        with pytest.raises(RecordStoreError):
            store.append(stored)


# =============================================================================
# FACTORY
# =============================================================================


class TestCreateRecordStore:
    def test_memory(self):
        assert isinstance(create_record_store("memory"), InMemoryRecordStore)

    def test_sql(self):
        assert isinstance(create_record_store("sql"), SqlRecordStore)

    def test_unknown_backend(self):
        with pytest.raises(RecordStoreError):
            create_record_store("redis")


# =============================================================================
# RECORD INVARIANTS (BOTH BACKENDS)
# =============================================================================


class TestRecordInvariants:
    def test_same_base_transfer_cannot_be_built(self):
        with pytest.raises(ValueError):
            Transfer(
                date=date(2024, 6, 2),
                from_base="Base Alpha",
                to_base="Base Alpha",
                equipment_type=EquipmentType.WEAPONS,
                quantity=1,
            )

    @pytest.mark.parametrize("qty", [0, -3, True, 2.5, "4", MAX_QUANTITY + 1])
    def test_bad_quantity_cannot_be_built(self, qty):
        with pytest.raises(ValueError):
            _purchase(qty=qty)

    def test_assigned_requires_personnel(self):
        with pytest.raises(ValueError):
            Assignment(
                date=date(2024, 6, 3),
                base="Base Bravo",
                equipment_type=EquipmentType.WEAPONS,
                quantity=1,
                status="Assigned",
                personnel="  ",
            )

    def test_expended_drops_personnel(self):
        record = Assignment(
            date=date(2024, 6, 3),
            base="Base Bravo",
            equipment_type=EquipmentType.WEAPONS,
            quantity=1,
            status="Expended",
            personnel="Sgt. Doe",
        )
        assert record.personnel is None

    def test_largest_quantity_stored_by_both_backends(self, store, sql_app):
        for backend in (store, get_record_store()):
            assert backend.append(_purchase(qty=MAX_QUANTITY)).quantity == MAX_QUANTITY
        assert get_record_store().purchases()[0].quantity == MAX_QUANTITY
