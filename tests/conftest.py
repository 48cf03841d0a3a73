"""Shared pytest fixtures for shiftledger tests."""

import tempfile
import os
from datetime import datetime, timedelta
from decimal import Decimal
import pytest

from shiftledger.database.factories import create_sqlite_database
from shiftledger.domain.catalog import ServiceCatalogService
from shiftledger.domain.shift import ShiftService


class TickingClock:
    """Clock that moves one second forward every time it is read."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    db.session_factory.kw["bind"].dispose()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Create a deterministic clock."""
    return TickingClock()


@pytest.fixture
def shift_service(temp_db, clock):
    """Create a ShiftService with a temporary database and a ticking clock."""
    return ShiftService(temp_db, clock=clock)


@pytest.fixture
def catalog_service(temp_db):
    """Create a ServiceCatalogService with a temporary database."""
    return ServiceCatalogService(temp_db)


@pytest.fixture
def open_shift(shift_service):
    """Open a shift with 100.00 in the drawer."""
    return shift_service.open_shift(Decimal("100.00"), opened_by="user-1")


@pytest.fixture
def sample_services(catalog_service):
    """Create a few catalog services and return their IDs by name."""
    return {
        "Haircut": catalog_service.create_service("Haircut", Decimal("250.00"), duration_minutes=45),
        "Manicure": catalog_service.create_service("Manicure", Decimal("180.00")),
        "Beard Trim": catalog_service.create_service("Beard Trim", Decimal("90.50"), duration_minutes=20),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
