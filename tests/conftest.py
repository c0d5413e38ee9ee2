"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory fakes of the account repository and email sender
- A wired RegistrationService
- A FastAPI test client with dependencies overridden
- A PostgreSQL connection pool (skips when the database is unreachable)
"""

import threading
from collections.abc import Generator
from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from psycopg import OperationalError
from psycopg_pool import ConnectionPool, PoolTimeout

from mailgate.adapters.repository.postgres import run_migrations
from mailgate.api.dependencies import get_registration_service, get_session_issuer
from mailgate.api.main import create_app
from mailgate.config.settings import get_settings
from mailgate.domain.credentials import CredentialHasher
from mailgate.domain.keys import Keypair, generate_keypair
from mailgate.domain.ports import Account
from mailgate.domain.registration import RegistrationService
from mailgate.domain.sessions import SessionIssuer

TEST_SECRET = "test-secret"


class InMemoryAccountRepository:
    """AccountRepository fake with the same uniqueness and transition rules."""

    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.mark_verified_calls = 0
        self._lock = threading.Lock()

    def create_account(self, account: Account) -> bool:
        with self._lock:
            if account.email in self.accounts:
                return False
            self.accounts[account.email] = account
            return True

    def find_by_email(self, email: str) -> Account | None:
        return self.accounts.get(email)

    def mark_verified(self, email: str) -> bool:
        with self._lock:
            self.mark_verified_calls += 1
            account = self.accounts.get(email)
            if account is None or account.verified:
                return False
            self.accounts[email] = replace(
                account, verified=True, verified_at=datetime.now(timezone.utc)
            )
            return True


class RecordingEmailSender:
    """EmailSender fake that records deliveries."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_verification_code(self, email: str, code: str) -> None:
        self.sent.append((email, code))


class FailingEmailSender:
    """EmailSender fake whose transport always fails."""

    def __init__(self) -> None:
        self.attempts = 0

    def send_verification_code(self, email: str, code: str) -> None:
        self.attempts += 1
        raise ConnectionRefusedError("SMTP relay unreachable")


@pytest.fixture(scope="session")
def keypair() -> Keypair:
    """One real RSA keypair shared across tests (generation is slow)."""
    return generate_keypair()


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def session_issuer() -> SessionIssuer:
    return SessionIssuer(secret=TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def service(
    repository: InMemoryAccountRepository,
    email_sender: RecordingEmailSender,
    session_issuer: SessionIssuer,
    keypair: Keypair,
) -> RegistrationService:
    return RegistrationService(
        repository=repository,
        email_sender=email_sender,
        session_issuer=session_issuer,
        hasher=CredentialHasher(cost=10),
        keypair_factory=lambda: keypair,
    )


@pytest.fixture
def app(service: RegistrationService, session_issuer: SessionIssuer) -> Generator[FastAPI, None, None]:
    """Application with the domain service wired to in-memory fakes."""
    test_app = create_app()
    # Routes never touch the pool directly; a mock satisfies app.state
    test_app.state.pool = MagicMock()
    test_app.dependency_overrides[get_registration_service] = lambda: service
    test_app.dependency_overrides[get_session_issuer] = lambda: session_issuer
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client without lifespan (no database), 500s returned not raised."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool for integration tests; skips if PostgreSQL is unreachable."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        timeout=5,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=5)
    except (OperationalError, PoolTimeout) as exc:
        pool.close()
        pytest.skip(f"PostgreSQL not available: {exc}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean accounts table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM accounts")
        conn.commit()
    yield


@pytest.fixture
def failing_email_sender() -> FailingEmailSender:
    return FailingEmailSender()
