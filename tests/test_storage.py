"""Tests for the key-value storage providers."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker

from wastewatch.config import Settings
from wastewatch.database import create_engine, init_db
from wastewatch.exceptions import ConcurrentModificationError
from wastewatch.services.report_service import ReportStore
from wastewatch.services.storage import MemoryKeyValueStorage, SqlKeyValueStorage


@pytest_asyncio.fixture
async def sql_storage(tmp_path):
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    engine = create_engine(settings)
    await init_db(engine)
    yield SqlKeyValueStorage(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def storage_kind(request):
    return request.param


@pytest_asyncio.fixture
async def storage(storage_kind, tmp_path):
    if storage_kind == "memory":
        yield MemoryKeyValueStorage()
        return

    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    engine = create_engine(settings)
    await init_db(engine)
    yield SqlKeyValueStorage(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


class TestKeyValueStorage:
    """Behaviour shared by every provider."""

    @pytest.mark.asyncio
    async def test_missing_key(self, storage):
        assert await storage.get("reports") is None
        assert await storage.get_versioned("reports") == (None, 0)

    @pytest.mark.asyncio
    async def test_set_then_get(self, storage):
        version = await storage.set("reports", b"[]")

        assert version == 1
        assert await storage.get("reports") == b"[]"

    @pytest.mark.asyncio
    async def test_set_overwrites_and_bumps_version(self, storage):
        await storage.set("reports", b"[1]")
        version = await storage.set("reports", b"[2]")

        assert version == 2
        assert await storage.get_versioned("reports") == (b"[2]", 2)

    @pytest.mark.asyncio
    async def test_compare_and_set_on_new_key(self, storage):
        assert await storage.compare_and_set("reports", b"[]", 0) == 1

    @pytest.mark.asyncio
    async def test_compare_and_set_matching_version(self, storage):
        await storage.set("reports", b"[1]")

        assert await storage.compare_and_set("reports", b"[2]", 1) == 2
        assert await storage.get("reports") == b"[2]"

    @pytest.mark.asyncio
    async def test_compare_and_set_stale_version(self, storage):
        await storage.set("reports", b"[1]")
        await storage.set("reports", b"[2]")

        with pytest.raises(ConcurrentModificationError) as exc_info:
            await storage.compare_and_set("reports", b"[3]", 1)

        assert exc_info.value.expected_version == 1
        assert exc_info.value.actual_version == 2
        assert await storage.get("reports") == b"[2]"

    @pytest.mark.asyncio
    async def test_compare_and_set_new_key_already_taken(self, storage):
        await storage.set("reports", b"[1]")

        with pytest.raises(ConcurrentModificationError):
            await storage.compare_and_set("reports", b"[2]", 0)

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, storage):
        await storage.set("a", b"1")

        assert await storage.get("b") is None


class TestSqlBackedStore:
    """The report store on top of the SQL provider."""

    @pytest.mark.asyncio
    async def test_snapshot_survives_new_store(self, sql_storage):
        first = ReportStore(sql_storage)
        await first.load()
        await first.update_report("1", {"status": "assigned", "assignedTo": "3"})

        second = ReportStore(sql_storage)
        reports = await second.load()

        report = next(r for r in reports if r.id == "1")
        assert report.assigned_to == "3"
        assert second.version == first.version

    @pytest.mark.asyncio
    async def test_optimistic_locking_against_sql(self, sql_storage):
        first = ReportStore(sql_storage, optimistic_locking=True)
        second = ReportStore(sql_storage, optimistic_locking=True)
        await first.load()
        await second.load()

        await first.mark_resolved("2")

        with pytest.raises(ConcurrentModificationError):
            await second.mark_resolved("3")
