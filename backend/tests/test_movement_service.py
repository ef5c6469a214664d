"""
Movement service tests: record -> store -> report round trips and listings.
"""

import pytest

from armory.records import Purchase, RecordKind, ReportFilter
from armory.services import movement_service
from armory.validation import ForbiddenError, InvalidInputError, UnauthenticatedError


# =============================================================================
# RECORDING
# =============================================================================


class TestRecording:
    def test_purchase_round_trip_into_report(self, store, admin):
        purchase = movement_service.record_purchase(store, admin, {
            "date": "2024-06-10",
            "base": "Base Charlie",
            "equipment_type": "Vehicles",
            "quantity": 4,
        })
        assert isinstance(purchase, Purchase)
        assert purchase.id == 1

        report = movement_service.compute_report(
            store, admin, ReportFilter(date_cutoff="2024-06-10", base="Base Charlie", equipment_type="Vehicles")
        )
        assert report.purchases == 4
        assert report.net_movement == 4

    def test_purchase_before_cutoff_moves_into_opening(self, store, admin):
        movement_service.record_purchase(store, admin, {
            "date": "2024-06-10", "base": "Base Alpha", "equipment_type": "Weapons", "quantity": 6,
        })
        report = movement_service.compute_report(store, admin, ReportFilter(date_cutoff="2024-06-11"))
        assert report.opening_balance == 6
        assert report.purchases == 6
        assert report.closing_balance == 12

    def test_ids_advance_per_kind(self, store, admin):
        movement_service.record_purchase(store, admin, {
            "date": "2024-06-01", "base": "Base Alpha", "equipment_type": "Weapons", "quantity": 1,
        })
        transfer = movement_service.record_transfer(store, admin, {
            "date": "2024-06-02", "from_base": "Base Alpha", "to_base": "Base Bravo",
            "equipment_type": "Weapons", "quantity": 1,
        })
        assignment = movement_service.record_assignment(store, admin, {
            "date": "2024-06-03", "base": "Base Bravo", "equipment_type": "Weapons",
            "quantity": 1, "status": "Expended",
        })
        assert transfer.id == 1
        assert assignment.id == 1

    def test_same_base_transfer_never_appends(self, store, admin):
        payload = {
            "date": "2024-06-02", "from_base": "Base Alpha", "to_base": "Base Alpha",
            "equipment_type": "Weapons", "quantity": 1,
        }
        for _ in range(3):
            with pytest.raises(InvalidInputError):
                movement_service.record_transfer(store, admin, payload)
        assert store.transfers() == ()

    def test_assigned_personnel_rule(self, store, alpha_commander):
        payload = {
            "date": "2024-06-05", "base": "Base Alpha", "equipment_type": "Weapons",
            "quantity": 2, "status": "Assigned", "personnel": "",
        }
        with pytest.raises(InvalidInputError):
            movement_service.record_assignment(store, alpha_commander, payload)
        assert store.assignments() == ()

        payload["personnel"] = "Captain Smith"
        assignment = movement_service.record_assignment(store, alpha_commander, payload)
        assert assignment.personnel == "Captain Smith"
        assert store.assignments() == (assignment,)

    def test_catalog_enforced_when_given(self, store, admin):
        with pytest.raises(InvalidInputError):
            movement_service.record_purchase(
                store,
                admin,
                {"date": "2024-06-01", "base": "Alpha", "equipment_type": "Weapons", "quantity": 1},
                bases=["Base Alpha", "Base Bravo"],
            )
        assert store.purchases() == ()

    def test_configured_catalog_applies_by_default(self, store, admin):
        payload = {"date": "2024-06-01", "base": "Base Zulu", "equipment_type": "Weapons", "quantity": 1}
        assert "Base Zulu" not in movement_service.DEFAULT_BASES
        with pytest.raises(InvalidInputError) as exc:
            movement_service.record_purchase(store, admin, payload)
        assert exc.value.field == "base"
        assert store.purchases() == ()

        stored = movement_service.record_purchase(store, admin, payload, bases=["Base Zulu"])
        assert stored.base == "Base Zulu"

    def test_forbidden_write_never_appends(self, store, logistics):
        with pytest.raises(ForbiddenError):
            movement_service.record_assignment(store, logistics, {
                "date": "2024-06-05", "base": "Base Alpha", "equipment_type": "Weapons",
                "quantity": 1, "status": "Expended",
            })
        assert store.counts() == {"purchase": 0, "transfer": 0, "assignment": 0}


# =============================================================================
# LISTING
# =============================================================================


class TestListing:
    def test_admin_sees_everything(self, demo_store, admin):
        assert len(movement_service.list_purchases(demo_store, admin)) == 2
        assert len(movement_service.list_transfers(demo_store, admin)) == 1
        assert len(movement_service.list_assignments(demo_store, admin)) == 2

    def test_commander_scoped_to_home_base(self, demo_store, alpha_commander):
        purchases = movement_service.list_purchases(demo_store, alpha_commander)
        assert [p.base for p in purchases] == ["Base Alpha"]
        # Outbound transfer touches Base Alpha
        assert len(movement_service.list_transfers(demo_store, alpha_commander)) == 1
        assert movement_service.list_assignments(demo_store, alpha_commander) == []

    def test_commander_never_sees_foreign_records(self, demo_store, alpha_commander, bravo_commander):
        for viewer in (alpha_commander, bravo_commander):
            for record in movement_service.list_purchases(demo_store, viewer):
                assert record.base == viewer.home_base
            for record in movement_service.list_assignments(demo_store, viewer):
                assert record.base == viewer.home_base
            for record in movement_service.list_transfers(demo_store, viewer):
                assert viewer.home_base in (record.from_base, record.to_base)

    def test_logistics_cannot_list_assignments(self, demo_store, logistics):
        with pytest.raises(ForbiddenError):
            movement_service.list_assignments(demo_store, logistics)
        assert len(movement_service.list_transfers(demo_store, logistics)) == 1

    def test_date_filter_is_exact(self, demo_store, admin):
        listed = movement_service.list_purchases(demo_store, admin, ReportFilter(date_cutoff="2024-06-03"))
        assert [p.base for p in listed] == ["Base Bravo"]

    def test_transfer_base_filter_matches_either_end(self, demo_store, admin):
        assert len(movement_service.list_transfers(demo_store, admin, ReportFilter(base="Base Alpha"))) == 1
        assert len(movement_service.list_transfers(demo_store, admin, ReportFilter(base="Base Bravo"))) == 1
        assert movement_service.list_transfers(demo_store, admin, ReportFilter(base="Base Charlie")) == []

    def test_list_records_by_kind(self, demo_store, admin):
        assert movement_service.list_records(demo_store, admin, RecordKind.PURCHASE) == list(demo_store.purchases())

    def test_requires_viewer(self, demo_store):
        with pytest.raises(UnauthenticatedError):
            movement_service.list_purchases(demo_store, None)
