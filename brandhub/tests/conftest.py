"""
Root test configuration and fixtures.

Provides:
- db_engine / db_session: SQLite in-memory database, rolled back per test
- blob_store: in-memory stand-in for the S3 blob store
- billing_client: MagicMock standing in for the Stripe client
"""

import os
from typing import Dict, Generator
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Set test environment
os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")


def _get_test_database_url() -> str:
    """Get database URL for tests."""
    database_url = os.getenv("TEST_DATABASE_URL")

    if database_url:
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        return database_url

    # Default to SQLite for unit tests if no PostgreSQL available
    return "sqlite:///:memory:"


def _is_postgres() -> bool:
    """Check if using PostgreSQL."""
    return _get_test_database_url().startswith("postgresql")


@pytest.fixture(scope="session")
def db_engine():
    """
    Create database engine for tests.

    Uses PostgreSQL if TEST_DATABASE_URL is set, otherwise SQLite in-memory.
    """
    database_url = _get_test_database_url()

    if _is_postgres():
        try:
            engine = create_engine(database_url, pool_pre_ping=True)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            pytest.skip(
                f"PostgreSQL not available. Unset TEST_DATABASE_URL to use SQLite. Error: {e}"
            )
    else:
        # SQLite in-memory for fast unit tests
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        # pysqlite only emits SAVEPOINT correctly when it does not manage
        # transactions itself.
        @event.listens_for(engine, "connect")
        def _do_connect(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _do_begin(conn):
            conn.exec_driver_sql("BEGIN")

    # Import and create all tables
    from brandhub.db_base import Base
    import brandhub.models  # noqa: F401 - registers all tables

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """
    Create database session with transaction rollback for test isolation.

    Session commits only release savepoints inside the outer transaction,
    which is rolled back after the test.
    """
    connection = db_engine.connect()
    transaction = connection.begin()

    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=connection,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


class InMemoryBlobStore:
    """Blob store that keeps objects in a dict."""

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.deleted = []

    def put(self, data: bytes, key: str, content_type: str) -> str:
        self.objects[key] = data
        self.content_types[key] = content_type
        return f"https://test-bucket.s3.us-east-1.amazonaws.com/{key}"

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
        self.deleted.append(key)

    def presign(self, key: str, ttl: int = 3600) -> str:
        return f"https://test-bucket.s3.us-east-1.amazonaws.com/{key}?X-Amz-Expires={ttl}"


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def billing_client():
    """Stripe client double with canned responses."""
    client = MagicMock()
    client.create_customer.return_value = "cus_test123"
    client.create_checkout_session.return_value = {
        "session_id": "cs_test_123",
        "url": "https://checkout.stripe.com/c/pay/cs_test_123",
    }
    client.create_portal_session.return_value = {
        "url": "https://billing.stripe.com/p/session/test",
    }
    return client


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "api: tests that drive the HTTP API through TestClient")
