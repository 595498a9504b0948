import json
import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_newsletter.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["APP_BASE_URL"] = "http://testserver"
os.environ["EMAIL_BASE_URL"] = "http://email.test"
os.environ["EMAIL_SENDER"] = "newsletter@example.com"
os.environ["EMAIL_AUTHORIZATION_TOKEN"] = "test-email-token"
os.environ["EMAIL_TIMEOUT_MILLISECONDS"] = "200"

import httpx
import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_db, get_email_client
from app.domain import SubscriberEmail
from app.main import app
from app.services.email import EmailClient


class FakeEmailServer:
    """Stands in for the email API: records every request and answers with ``status_code``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code)

    def received_json(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def email_server() -> FakeEmailServer:
    return FakeEmailServer()


@pytest.fixture(scope="function")
def email_client(email_server: FakeEmailServer) -> EmailClient:
    return EmailClient(
        base_url="http://email.test",
        sender=SubscriberEmail.parse("newsletter@example.com"),
        authorization_token="test-email-token",
        timeout=0.2,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(email_server.handler)),
    )


@pytest.fixture(scope="function")
def client(db_session, email_client: EmailClient):
    """Create a test client with database and email client dependency overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_client] = lambda: email_client

    yield TestClient(app)

    app.dependency_overrides.clear()
