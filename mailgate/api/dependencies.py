"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache, partial

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from mailgate.adapters.repository.postgres import PostgresAccountRepository
from mailgate.adapters.smtp.console import ConsoleEmailSender
from mailgate.adapters.smtp.smtp import SmtpEmailSender
from mailgate.config.settings import get_settings
from mailgate.domain.credentials import CredentialHasher
from mailgate.domain.exceptions import InvalidCredential
from mailgate.domain.keys import generate_keypair
from mailgate.domain.ports import EmailSender
from mailgate.domain.registration import RegistrationService
from mailgate.domain.sessions import SessionIssuer


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


@lru_cache
def get_email_sender() -> EmailSender:
    """
    Get the process-wide email sender.

    SMTP when mail credentials are configured, console logging otherwise.
    """
    settings = get_settings()
    if settings.email_user and settings.email_pass:
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            from_addr=settings.email_from,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleEmailSender()


@lru_cache
def get_session_issuer() -> SessionIssuer:
    """Get the session issuer bound to the process-wide signing secret."""
    settings = get_settings()
    return SessionIssuer(
        secret=settings.jwt_secret,
        ttl_seconds=settings.session_ttl_seconds,
        algorithm=settings.jwt_algorithm,
    )


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, email sender and session issuer
    for the domain service.
    """
    settings = get_settings()
    keypair_factory = (
        partial(generate_keypair, settings.rsa_key_size) if settings.issue_keypairs else None
    )
    return RegistrationService(
        repository=get_repository(request),
        email_sender=get_email_sender(),
        session_issuer=get_session_issuer(),
        hasher=CredentialHasher(cost=settings.bcrypt_cost),
        keypair_factory=keypair_factory,
    )


# Bearer security scheme for OpenAPI documentation. auto_error is off so
# that a missing header maps to 403 with our own message.
http_bearer = HTTPBearer(auto_error=False)


def get_current_email(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> str:
    """
    Resolve the caller's email from an Authorization: Bearer credential.

    Raises:
        HTTPException 403: Header missing, not Bearer, or credential invalid
            (expired and forged are not distinguished)
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No credential provided",
        )

    try:
        return issuer.verify(credentials.credentials)
    except InvalidCredential:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid credential",
        ) from None
