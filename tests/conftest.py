"""Pytest configuration and fixtures for test suite."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from wastewatch.models.report import Priority, Report, ReportStatus, WasteType
from wastewatch.models.staff import StaffMember
from wastewatch.services.report_service import ReportStore
from wastewatch.services.sample_data import sample_staff
from wastewatch.services.staff_directory import StaffDirectory
from wastewatch.services.storage import MemoryKeyValueStorage

BASE_TIME = datetime(2026, 2, 10, 12, 0, tzinfo=timezone.utc)


class FailingStorage(MemoryKeyValueStorage):
    """Memory storage whose reads and/or writes can be switched to fail."""

    def __init__(self, initial=None, fail_reads=False, fail_writes=False):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    async def get_versioned(self, key):
        if self.fail_reads:
            raise ConnectionError("storage offline")
        return await super().get_versioned(key)

    async def set(self, key, value):
        self.write_attempts += 1
        if self.fail_writes:
            raise OSError("disk full")
        return await super().set(key, value)


@pytest.fixture
def make_report():
    """Build a report with sensible defaults; keyword overrides win."""

    def _make(report_id="r1", hours=0, **overrides):
        data = {
            "id": report_id,
            "title": f"Report {report_id}",
            "description": "",
            "waste_type": WasteType.MIXED,
            "status": ReportStatus.PENDING,
            "priority": Priority.MEDIUM,
            "latitude": 28.6139,
            "longitude": 77.2090,
            "address": "Sector 1",
            "created_at": BASE_TIME + timedelta(hours=hours),
            "ai_confidence": 90,
            "credits_earned": 20,
        }
        data.update(overrides)
        return Report(**data)

    return _make


@pytest.fixture
def make_staff():
    """Build a staff member; keyword overrides win."""

    def _make(staff_id="1", **overrides):
        data = {
            "id": staff_id,
            "name": f"Staff {staff_id}",
            "zone": "Zone A",
            "rating": 4.5,
            "tasks_completed": 10,
            "active_tasks": 0,
            "max_tasks": 8,
            "active": True,
        }
        data.update(overrides)
        return StaffMember(**data)

    return _make


@pytest.fixture
def memory_storage():
    return MemoryKeyValueStorage()


@pytest.fixture
def staff_directory():
    return StaffDirectory(sample_staff())


@pytest_asyncio.fixture
async def store(memory_storage):
    """A store loaded from empty storage, so seeded with the sample reports."""
    report_store = ReportStore(memory_storage)
    await report_store.load()
    return report_store


@pytest_asyncio.fixture
async def empty_store(memory_storage):
    report_store = ReportStore(memory_storage, seed_sample_data=False)
    await report_store.load()
    return report_store


@pytest.fixture
def api_client(staff_directory):
    """TestClient with app state populated from in-memory services."""
    from fastapi.testclient import TestClient

    from wastewatch.main import app
    from wastewatch.services.classifier_service import ClassifierService

    report_store = ReportStore(MemoryKeyValueStorage())
    asyncio.run(report_store.load())

    app.state.report_store = report_store
    app.state.staff_directory = staff_directory
    app.state.classifier = ClassifierService()

    client = TestClient(app)
    yield client

    del app.state.report_store
    del app.state.staff_directory
    del app.state.classifier
