"""
Test configuration and fixtures
"""
import pytest
from typing import Generator, List

from sqlalchemy import event
from sqlalchemy.orm import Session

from app import create_app
from config import AppConfig
from db.database import create_db_engine, create_tables
from db.repositories.unit_of_work import UnitOfWork
from db.services.notice_service import NoticeChannel
from tests.utils.seed import TEST_PAGE_SIZE, create_user


class RecordingNoticeChannel(NoticeChannel):
    """In-memory notice queue for tests that run outside a request."""

    def __init__(self):
        self.pending: List[str] = []

    def push(self, notice: str) -> None:
        self.pending.append(notice)

    def drain(self) -> List[str]:
        drained, self.pending = self.pending, []
        return drained


@pytest.fixture
def test_config() -> AppConfig:
    return AppConfig(
        secret_key="test-secret-key",
        database_url="sqlite://",
        posts_per_page=TEST_PAGE_SIZE,
        log_level="WARNING"
    )


@pytest.fixture
def app(test_config):
    """Create application for testing, with a fresh in-memory database"""
    app = create_app(test_config)
    app.config.update({
        "TESTING": True,
        "WTF_CSRF_ENABLED": False,
    })
    yield app
    app.config["DB_ENGINE"].dispose()


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def make_uow(app):
    """Factory for Units of Work on the app's database.

    Use a fresh one per phase of a test (seed, then verify): sessions keep
    loaded rows, so a reused session would not see changes made over HTTP.
    """
    created: List[UnitOfWork] = []

    def _make() -> UnitOfWork:
        uow = UnitOfWork(session_factory=app.config["SESSION_FACTORY"])
        created.append(uow)
        return uow

    yield _make
    for uow in created:
        uow.close()


@pytest.fixture
def logged_in_client(client, make_uow):
    """Test client whose session carries a registered operator."""
    uow = make_uow()
    user = create_user(uow, "operator", "correct-horse")
    uow.commit()
    with client.session_transaction() as sess:
        sess["user_id"] = user.id
    return client


@pytest.fixture
def query_log(app) -> List[str]:
    """Every SQL statement the app's engine executes during the test."""
    statements: List[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    engine = app.config["DB_ENGINE"]
    event.listen(engine, "before_cursor_execute", _record)
    yield statements
    event.remove(engine, "before_cursor_execute", _record)


# ===== Database Fixtures (no Flask app) =====

@pytest.fixture
def test_db_engine():
    """In-memory SQLite engine with the schema created."""
    engine = create_db_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(test_db_engine) -> Generator[Session, None, None]:
    """Provide a database session for each test."""
    session = Session(bind=test_db_engine, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def uow(db_session) -> UnitOfWork:
    """
    Provide a Unit of Work instance with the test database session.
    """
    return UnitOfWork(session=db_session)


@pytest.fixture
def notices() -> RecordingNoticeChannel:
    return RecordingNoticeChannel()
