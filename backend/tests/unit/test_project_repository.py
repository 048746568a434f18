"""
Unit tests for ProjectRepository.

Tests CRUD operations with AAA pattern (Arrange, Act, Assert).
"""

import json

import pytest

from navsite.core.exceptions import NotFound, StorageFault, ValidationError
from navsite.repositories.collection import generate_id
from navsite.repositories.projects import PROJECTS_KEY, ProjectRepository
from navsite.schemas.project import ProjectInput


@pytest.fixture
def repo(kv_store):
    return ProjectRepository(kv_store)


class TestProjectRepository:
    """
    Test suite for ProjectRepository.

    Each test follows AAA pattern: Arrange, Act, Assert.
    """

    async def test_list_empty_when_nothing_stored(self, repo):
        assert await repo.list() == []

    async def test_create_and_list(self, repo):
        # Act
        project = await repo.create(ProjectInput(name="A", url="https://x.com"))
        projects = await repo.list()

        # Assert
        assert len(projects) == 1
        assert projects[0].name == "A"
        assert projects[0].url == "https://x.com"
        assert projects[0].id == project.id
        assert project.id

    async def test_create_applies_defaults(self, repo):
        project = await repo.create(ProjectInput(name="A", url="https://x.com"))

        assert project.description == ""
        assert project.category == "other"
        assert project.tags == []
        assert project.created_at
        assert project.created_at == project.updated_at
        assert project.created_at.endswith("Z")

    async def test_create_keeps_given_fields(self, repo):
        project = await repo.create(ProjectInput(
            name="Docs",
            url="https://docs.example.com",
            description="Reference",
            category="cat123",
            tags=["python", "reference"],
        ))

        assert project.description == "Reference"
        assert project.category == "cat123"
        assert project.tags == ["python", "reference"]

    async def test_newest_first(self, repo):
        # Arrange
        first = await repo.create(ProjectInput(name="First", url="https://1.example"))

        # Act
        second = await repo.create(ProjectInput(name="Second", url="https://2.example"))
        projects = await repo.list()

        # Assert
        assert [p.id for p in projects] == [second.id, first.id]

    @pytest.mark.parametrize("data", [
        ProjectInput(url="https://x.com"),
        ProjectInput(name="A"),
        ProjectInput(name="  ", url="https://x.com"),
        ProjectInput(name="A", url=""),
    ])
    async def test_create_requires_name_and_url(self, repo, data):
        with pytest.raises(ValidationError):
            await repo.create(data)

        assert await repo.list() == []

    async def test_update_in_place(self, repo):
        # Arrange
        older = await repo.create(ProjectInput(name="Old", url="https://old.example"))
        newer = await repo.create(ProjectInput(name="New", url="https://new.example"))

        # Act
        updated = await repo.update(older.id, ProjectInput(
            name="Old renamed",
            url="https://old.example/v2",
            tags=["x"],
        ))
        projects = await repo.list()

        # Assert
        assert [p.id for p in projects] == [newer.id, older.id]
        assert projects[1].name == "Old renamed"
        assert updated.id == older.id
        assert updated.created_at == older.created_at
        assert updated.updated_at >= older.updated_at
        assert updated.tags == ["x"]

    async def test_update_resets_missing_optional_fields(self, repo):
        # Arrange
        project = await repo.create(ProjectInput(
            name="A", url="https://x.com", description="d", category="c1", tags=["t"],
        ))

        # Act
        updated = await repo.update(project.id, ProjectInput(name="A", url="https://x.com"))

        # Assert
        assert updated.description == ""
        assert updated.category == "other"
        assert updated.tags == []

    async def test_update_unknown_id_leaves_collection_unchanged(self, repo, kv_store):
        # Arrange
        await repo.create(ProjectInput(name="A", url="https://x.com"))
        before = await kv_store.get(PROJECTS_KEY)

        # Act
        with pytest.raises(NotFound):
            await repo.update("missing", ProjectInput(name="B", url="https://y.com"))

        # Assert
        assert await kv_store.get(PROJECTS_KEY) == before

    async def test_update_validates_before_lookup(self, repo):
        with pytest.raises(ValidationError):
            await repo.update("missing", ProjectInput(name="B"))

    async def test_delete(self, repo):
        # Arrange
        keep = await repo.create(ProjectInput(name="Keep", url="https://k.example"))
        drop = await repo.create(ProjectInput(name="Drop", url="https://d.example"))

        # Act
        await repo.delete(drop.id)

        # Assert
        assert [p.id for p in await repo.list()] == [keep.id]

        with pytest.raises(NotFound):
            await repo.delete(drop.id)

    async def test_stored_layout_is_camel_case_json_array(self, repo, kv_store):
        await repo.create(ProjectInput(name="A", url="https://x.com"))

        stored = json.loads(await kv_store.get(PROJECTS_KEY))

        assert isinstance(stored, list)
        assert set(stored[0]) == {
            "id", "name", "url", "description", "category", "tags", "createdAt", "updatedAt",
        }

    async def test_reads_records_written_by_older_deployments(self, repo, kv_store):
        # Arrange
        legacy = [{
            "id": "lq1x2y3z4abc",
            "name": "Legacy",
            "url": "https://legacy.example",
            "description": "",
            "category": "web",
            "tags": [],
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        }]
        await kv_store.put(PROJECTS_KEY, json.dumps(legacy))

        # Act
        projects = await repo.list()

        # Assert
        assert projects[0].id == "lq1x2y3z4abc"
        assert projects[0].category == "web"

    async def test_malformed_json_reads_as_empty(self, repo, kv_store):
        await kv_store.put(PROJECTS_KEY, "{not json")

        assert await repo.list() == []

    async def test_non_list_value_reads_as_empty(self, repo, kv_store):
        await kv_store.put(PROJECTS_KEY, '{"id": "x"}')

        assert await repo.list() == []

    @pytest.mark.parametrize("stored", ["{not json", '{"id": "x"}'])
    async def test_unreadable_collection_is_not_overwritten(self, repo, kv_store, stored):
        # Arrange
        await kv_store.put(PROJECTS_KEY, stored)

        # Act
        with pytest.raises(StorageFault):
            await repo.create(ProjectInput(name="A", url="https://x.com"))

        # Assert
        assert await kv_store.get(PROJECTS_KEY) == stored


class TestMalformedStoredEntries:
    """Entries that fail validation are hidden from reads, kept by writes."""

    MALFORMED = {"id": "old1", "name": 5, "url": "https://old.example", "tags": []}
    VALID = {"id": "old2", "name": "Fine", "url": "https://fine.example"}

    @pytest.fixture
    async def stored(self, kv_store):
        await kv_store.put(PROJECTS_KEY, json.dumps(["junk", self.MALFORMED, self.VALID]))

    async def _stored_entries(self, kv_store):
        return json.loads(await kv_store.get(PROJECTS_KEY))

    async def test_list_skips_malformed_entries(self, repo, stored):
        projects = await repo.list()

        assert [p.id for p in projects] == ["old2"]

    async def test_create_keeps_malformed_entries(self, repo, kv_store, stored):
        # Act
        created = await repo.create(ProjectInput(name="New", url="https://new.example"))

        # Assert
        entries = await self._stored_entries(kv_store)
        assert entries[0]["id"] == created.id
        assert entries[1:3] == ["junk", self.MALFORMED]
        assert entries[3]["id"] == "old2"

    async def test_update_of_other_record_keeps_malformed_entries(self, repo, kv_store, stored):
        await repo.update("old2", ProjectInput(name="Renamed", url="https://fine.example"))

        entries = await self._stored_entries(kv_store)
        assert entries[:2] == ["junk", self.MALFORMED]
        assert entries[2]["name"] == "Renamed"

    async def test_delete_of_other_record_keeps_malformed_entries(self, repo, kv_store, stored):
        await repo.delete("old2")

        assert await self._stored_entries(kv_store) == ["junk", self.MALFORMED]

    async def test_malformed_entry_can_be_deleted_by_id(self, repo, kv_store, stored):
        await repo.delete("old1")

        entries = await self._stored_entries(kv_store)
        assert entries[0] == "junk"
        assert [entry["id"] for entry in entries[1:]] == ["old2"]

    async def test_update_repairs_malformed_entry_in_place(self, repo, kv_store):
        # Arrange
        legacy = {**self.MALFORMED, "createdAt": "2024-01-01T00:00:00.000Z"}
        await kv_store.put(PROJECTS_KEY, json.dumps([legacy, self.VALID]))

        # Act
        updated = await repo.update("old1", ProjectInput(name="Five", url="https://old.example"))

        # Assert
        assert updated.created_at == "2024-01-01T00:00:00.000Z"
        assert [p.id for p in await repo.list()] == ["old1", "old2"]
        assert (await repo.list())[0].name == "Five"


class TestGenerateId:
    """Test record id generation."""

    def test_ids_are_unique(self):
        ids = {generate_id() for _ in range(500)}

        assert len(ids) == 500

    def test_ids_are_lowercase_base36(self):
        record_id = generate_id()

        assert record_id
        assert all(c in "0123456789abcdefghijklmnopqrstuvwxyz" for c in record_id)
