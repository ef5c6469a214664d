"""
Pytest fixtures for armory backend tests.

Provides viewers for every role, fresh record stores, and Flask apps for the
memory and SQL backends.
"""

from datetime import date

import pytest

from armory import create_app
from armory.extensions import db, get_record_store
from armory.records import EquipmentType, Purchase, Role, Transfer, Viewer
from armory.services.record_store import InMemoryRecordStore
from armory.services.seed_service import seed_demo_movements


TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'RECORD_STORE_BACKEND': 'memory',
    'SEED_DEMO_DATA': False,
}


# =============================================================================
# VIEWERS
# =============================================================================


@pytest.fixture()
def admin():
    return Viewer(username="admin", role=Role.ADMIN)


@pytest.fixture()
def logistics():
    return Viewer(username="logistics", role=Role.LOGISTICS_OFFICER)


@pytest.fixture()
def alpha_commander():
    return Viewer(username="commander1", role=Role.BASE_COMMANDER, home_base="Base Alpha")


@pytest.fixture()
def bravo_commander():
    return Viewer(username="commander2", role=Role.BASE_COMMANDER, home_base="Base Bravo")


# =============================================================================
# STORES
# =============================================================================


@pytest.fixture()
def store():
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture()
def demo_store(store):
    """
    Demo movements:
    - Purchase  2024-06-01 Base Alpha Weapons 10
    - Purchase  2024-06-03 Base Bravo Vehicles 5
    - Transfer  2024-06-04 Base Alpha -> Base Bravo Weapons 3
    - Assigned  2024-06-05 Base Bravo Weapons 2 (Captain Smith)
    - Expended  2024-06-06 Base Bravo Weapons 1
    """
    seed_demo_movements(store)
    return store


@pytest.fixture()
def scenario_store(store):
    """One purchase at Alpha and one transfer Alpha -> Bravo."""
    store.append(Purchase(date=date(2024, 6, 1), base="Alpha", equipment_type=EquipmentType.WEAPONS, quantity=10))
    store.append(Transfer(
        date=date(2024, 6, 4),
        from_base="Alpha",
        to_base="Bravo",
        equipment_type=EquipmentType.WEAPONS,
        quantity=3,
    ))
    return store


# =============================================================================
# FLASK APPS
# =============================================================================


@pytest.fixture()
def app():
    """Application on the in-memory record store."""
    app = create_app(dict(TEST_CONFIG))
    with app.app_context():
        yield app


@pytest.fixture()
def demo_app(app):
    seed_demo_movements(get_record_store())
    return app


@pytest.fixture()
def sql_app():
    """Application on the SQL record store (in-memory SQLite)."""
    app = create_app({**TEST_CONFIG, 'RECORD_STORE_BACKEND': 'sql'})
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture()
def admin_headers():
    return {"X-Username": "admin"}


@pytest.fixture()
def commander_headers():
    return {"X-Username": "commander1"}


@pytest.fixture()
def logistics_headers():
    return {"X-Username": "logistics"}
