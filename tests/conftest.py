import pytest
from fastapi.testclient import TestClient

from todo_api.db import init_db, scoped_connection
from todo_api.main import create_app
from todo_api.repositories import TodoRepository
from todo_api.settings import Settings


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "todos.db")


@pytest.fixture
def settings(db_path):
    return Settings(database_url=f"sqlite:///{db_path}")


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def repo(db_path):
    init_db(db_path)
    with scoped_connection(db_path) as conn:
        yield TodoRepository(conn)
