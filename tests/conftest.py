import pytest

from db.engine import dispose_db, get_session
from import_engine.errors import PersistenceError
from main import create_app


class MemoryStore:
    """In-memory RecordStore.  ``fail`` decides which records to refuse."""

    def __init__(self, keys=(), fail=None, exc=PersistenceError):
        self.keys = list(keys)
        self.inserted = []
        self.fail = fail
        self.exc = exc

    def existing_keys(self, schema):
        return self.keys + [r.duplicate_key() for r in self.inserted
                            if r.kind == schema.name]

    def insert(self, record):
        if self.fail is not None and self.fail(record):
            raise self.exc("connection lost")
        self.inserted.append(record)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def app(tmp_path):
    """Flask app backed by a throwaway SQLite file."""
    app = create_app(f"sqlite:///{tmp_path / 'test.sqlite'}")
    app.config["TESTING"] = True
    yield app
    dispose_db()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def count(app):
    """Return a row counter that opens and closes its own session."""
    def _count(model):
        session = get_session()
        try:
            return session.query(model).count()
        finally:
            session.close()
    return _count
