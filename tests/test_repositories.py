"""Tests for the garden repositories (in-memory and Supabase-backed)."""

import pytest

from plant_tracker.modules.garden.domain.models.achievement import AchievementId
from plant_tracker.modules.garden.domain.models.garden import UserAppData
from plant_tracker.modules.garden.infrastructure import InMemoryGardenRepository, SupabaseGardenRepository
from plant_tracker.shared.core.exceptions import RepositoryError
from tests.conftest import make_plant


def _garden() -> UserAppData:
    data = UserAppData.initial("ana")
    return data.model_copy(update={
        "plants": [make_plant()],
        "unlocked_achievements": frozenset({AchievementId.FIRST_PLANT}),
    })


# ============================================================================
# In-memory
# ============================================================================


@pytest.mark.asyncio
async def test_memory_round_trip() -> None:
    repository = InMemoryGardenRepository()
    data = _garden()

    await repository.save_profile("ana", data)

    assert "ana" in repository
    assert await repository.load_profile("ana") == data
    assert await repository.load_profile("bob") is None


@pytest.mark.asyncio
async def test_memory_copies_are_independent() -> None:
    repository = InMemoryGardenRepository()
    await repository.save_profile("ana", _garden())

    first = await repository.load_profile("ana")
    second = await repository.load_profile("ana")

    assert first == second
    assert first is not second


# ============================================================================
# Supabase
# ============================================================================


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Records the PostgREST builder chain and returns canned rows."""

    def __init__(self, table: "FakeTable"):
        self.table = table

    def select(self, columns):
        self.table.calls.append(("select", columns))
        return self

    def eq(self, column, value):
        self.table.calls.append(("eq", column, value))
        return self

    def limit(self, count):
        self.table.calls.append(("limit", count))
        return self

    def upsert(self, row, on_conflict=None):
        self.table.calls.append(("upsert", on_conflict))
        self.table.upserted.append(row)
        return self

    def execute(self):
        if self.table.error is not None:
            raise self.table.error
        return FakeResponse(self.table.rows)


class FakeTable:
    def __init__(self):
        self.rows = []
        self.upserted = []
        self.calls = []
        self.error = None


class FakeManager:
    def __init__(self):
        self.tables = {}
        self.health_checked = []

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, FakeTable()))

    async def health_check(self, table_name):
        self.health_checked.append(table_name)
        return {"status": "healthy", "backend": "supabase", "error": None}


@pytest.fixture
def manager() -> FakeManager:
    return FakeManager()


@pytest.fixture
def supabase_repository(manager) -> SupabaseGardenRepository:
    return SupabaseGardenRepository(manager, table_name="gardens")


@pytest.mark.asyncio
async def test_supabase_save_upserts_json_blob(supabase_repository, manager) -> None:
    await supabase_repository.save_profile("ana", _garden())

    table = manager.tables["gardens"]
    assert ("upsert", "user_key") in table.calls
    row = table.upserted[0]
    assert row["user_key"] == "ana"
    assert row["data"]["profile"]["name"] == "ana"
    assert row["data"]["unlocked_achievements"] == ["FIRST_PLANT"]
    assert "updated_at" in row


@pytest.mark.asyncio
async def test_supabase_load_reads_single_row(supabase_repository, manager) -> None:
    data = _garden()
    await supabase_repository.save_profile("ana", data)
    table = manager.tables["gardens"]
    table.rows = [{"data": table.upserted[0]["data"]}]

    loaded = await supabase_repository.load_profile("ana")

    assert loaded == data
    assert ("eq", "user_key", "ana") in table.calls
    assert ("limit", 1) in table.calls


@pytest.mark.asyncio
async def test_supabase_load_missing_profile(supabase_repository) -> None:
    assert await supabase_repository.load_profile("nobody") is None


@pytest.mark.asyncio
async def test_supabase_corrupt_row_raises(supabase_repository, manager) -> None:
    manager.table("gardens").table.rows = [{"data": {"plants": "not a list"}}]

    with pytest.raises(RepositoryError) as exc_info:
        await supabase_repository.load_profile("ana")
    assert exc_info.value.details["operation"] == "load_profile"


@pytest.mark.asyncio
async def test_supabase_backend_errors_are_wrapped(supabase_repository, manager) -> None:
    manager.table("gardens").table.error = ConnectionError("connection refused")

    with pytest.raises(RepositoryError):
        await supabase_repository.load_profile("ana")
    with pytest.raises(RepositoryError) as exc_info:
        await supabase_repository.save_profile("ana", _garden())
    assert "connection refused" in exc_info.value.message


@pytest.mark.asyncio
async def test_supabase_health_check_uses_table(supabase_repository, manager) -> None:
    result = await supabase_repository.health_check()

    assert result["status"] == "healthy"
    assert manager.health_checked == ["gardens"]
