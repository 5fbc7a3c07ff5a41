"""
Shared test fixtures for the SimpleDB test suite.
"""

import pytest

from simpledb.db.engine import Database
from simpledb.models.registry import ModelRegistry


SCHEMA = [
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT,
        name TEXT,
        email TEXT,
        parent_id INTEGER,
        settings TEXT
    )
    """,
    """
    CREATE TABLE posts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        author_id INTEGER,
        title TEXT
    )
    """,
]


@pytest.fixture
def db():
    """Connected in-memory SQLite engine, schema only."""
    database = Database("sqlite:///:memory:", debug=True)
    database.connect()
    for statement in SCHEMA:
        database.query(statement)
    yield database
    database.disconnect()


@pytest.fixture
def seeded_db(db):
    """``db`` with a small family of users and their posts."""
    users = db.table("users")
    users.insert({"name": "root", "email": "root@example.com", "created": "2017-01-01 00:00:00"})
    users.insert({"name": "alice", "email": "alice@example.com", "parent_id": 1})
    users.insert({"name": "bob", "email": "bob@example.com", "parent_id": 1})

    posts = db.table("posts")
    posts.insert({"author_id": 2, "title": "first"})
    posts.insert({"author_id": 2, "title": "second"})
    return db


@pytest.fixture
def model_registry():
    """Registry that forgets models declared during the test."""
    snapshot = ModelRegistry.all_models()
    yield ModelRegistry
    ModelRegistry.reset()
    ModelRegistry._models.update(snapshot)
