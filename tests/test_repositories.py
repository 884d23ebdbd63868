from datetime import datetime

import pytest

from todo_api.db import scoped_connection
from todo_api.errors import StoreError


class TestInsertAndRead:
    def test_insert_defaults(self, repo):
        todo = repo.insert("Buy milk")
        assert todo["title"] == "Buy milk"
        assert todo["is_done"] is False
        assert isinstance(todo["created_at"], datetime)
        assert todo["created_at"].tzinfo is not None

    def test_round_trip(self, repo):
        created = repo.insert("Read book")
        assert repo.get_by_id(created["id"]) == created

    def test_ids_are_unique(self, repo):
        ids = {repo.insert(f"Task {i}")["id"] for i in range(5)}
        assert len(ids) == 5

    def test_get_missing_returns_none(self, repo):
        assert repo.get_by_id(999999) is None

    def test_insert_visible_to_other_connections(self, repo, db_path):
        created = repo.insert("Shared")
        with scoped_connection(db_path) as other:
            row = other.execute("SELECT Title FROM Todos WHERE Id = ?", (created["id"],)).fetchone()
        assert row["Title"] == "Shared"

    @pytest.mark.parametrize("title", ["", "   ", "z" * 201])
    def test_table_constraint_rejects_bad_titles(self, repo, title):
        with pytest.raises(StoreError):
            repo.insert(title)
        assert repo.list_all() == []


class TestListAll:
    def test_empty(self, repo):
        assert repo.list_all() == []

    def test_newest_first(self, repo):
        created = [repo.insert(f"Task {i}") for i in range(4)]
        listed = repo.list_all()
        assert [t["id"] for t in listed] == [t["id"] for t in reversed(created)]
        stamps = [t["created_at"] for t in listed]
        assert stamps == sorted(stamps, reverse=True)


class TestUpdate:
    def test_update_changes_only_mutable_fields(self, repo, db_path):
        created = repo.insert("Initial")
        updated = repo.update(created["id"], "Replaced", True)
        assert updated is not None
        assert updated["id"] == created["id"]
        assert updated["created_at"] == created["created_at"]
        assert updated["title"] == "Replaced"
        assert updated["is_done"] is True
        with scoped_connection(db_path) as other:
            row = other.execute("SELECT IsDone FROM Todos WHERE Id = ?", (created["id"],)).fetchone()
        assert bool(row["IsDone"]) is True

    def test_update_missing_returns_none(self, repo):
        assert repo.update(424242, "Nope", False) is None
        assert repo.list_all() == []


class TestDelete:
    def test_delete_twice(self, repo):
        created = repo.insert("ToDelete")
        assert repo.delete(created["id"]) is True
        assert repo.delete(created["id"]) is False
        assert repo.get_by_id(created["id"]) is None

    def test_delete_missing(self, repo):
        assert repo.delete(123456) is False


class TestStoreErrors:
    def test_missing_table_raises_store_error(self, repo, db_path):
        with scoped_connection(db_path) as other:
            other.execute("DROP TABLE Todos")
        with pytest.raises(StoreError):
            repo.list_all()
