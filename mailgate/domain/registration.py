"""
Registration domain service - account verification state machine.

This module contains the core business logic for user registration and
email verification.

Verification State Machine (Forward-Only Transitions)
=====================================================

States:
- UNVERIFIED: Initial state after registration (token issued, pending verification)
- VERIFIED: Terminal state after a submitted token matched the pending token

Valid Transitions:
    UNVERIFIED -> VERIFIED   (token match)

Invalid Transitions (never allowed):
    VERIFIED -> any          (VERIFIED is terminal)

Replaying the correct token on a VERIFIED account is an idempotent
success: a fresh session credential is returned but the transition is
not re-applied. The pending token is not invalidated after use.

Mail delivery is decoupled from registration. register() persists the
account and returns the pending token; the caller acknowledges the
client first and then invokes deliver_verification_token(), whose
failures are logged and never undo the registration.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field

from .credentials import MAX_PASSWORD_BYTES, CredentialHasher
from .exceptions import EmailAlreadyRegistered, MissingFields, PasswordMismatch, PasswordTooLong
from .keys import Keypair, generate_keypair
from .ports import Account, AccountRepository, AccountState, EmailSender, VerifyResult
from .sessions import SessionIssuer
from .tokens import generate_verification_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingVerification:
    """A freshly registered account awaiting token delivery."""

    email: str
    token: str


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of verify_token(); session_token is set only on success."""

    result: VerifyResult
    session_token: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.result in (VerifyResult.SUCCESS, VerifyResult.ALREADY_VERIFIED)


@dataclass
class RegistrationService:
    """
    Domain service for user registration and verification.

    Orchestrates the registration flow (input validation, email
    normalization, password hashing, token and keypair generation,
    persistence) and the verification flow (token comparison, the
    verified transition, session credential issuance).
    """

    repository: AccountRepository
    email_sender: EmailSender
    session_issuer: SessionIssuer
    hasher: CredentialHasher = field(default_factory=CredentialHasher)
    keypair_factory: Callable[[], Keypair] | None = generate_keypair

    def register(
        self, name: str | None, email: str | None, password: str | None, confirm_password: str | None
    ) -> PendingVerification:
        """
        Register a new, unverified account.

        Args:
            name: Display name
            email: User's email address (will be normalized)
            password: User's password (will be hashed)
            confirm_password: Must equal password

        Returns:
            The normalized email and the token to deliver

        Raises:
            MissingFields: If any input is absent or empty
            PasswordMismatch: If password and confirmation differ
            PasswordTooLong: If the password exceeds 72 bytes as UTF-8
            EmailAlreadyRegistered: If an account already exists for the email
        """
        if not name or not email or not password or not confirm_password:
            raise MissingFields("All fields are required")
        if password != confirm_password:
            raise PasswordMismatch("Passwords do not match")
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise PasswordTooLong(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        normalized_email = self._normalize_email(email)
        if not normalized_email:
            raise MissingFields("All fields are required")

        # The insert is the only uniqueness check; a pre-check would race
        password_hash = self.hasher.hash(password)
        token = generate_verification_token()
        keypair = self.keypair_factory() if self.keypair_factory is not None else None

        account = Account(
            email=normalized_email,
            name=name,
            password_hash=password_hash,
            pending_token=token,
            public_key=keypair.public_key if keypair else None,
            private_key=keypair.private_key if keypair else None,
        )
        if not self.repository.create_account(account):
            raise EmailAlreadyRegistered(normalized_email)

        logger.info("Account registered: %s", normalized_email)
        return PendingVerification(email=normalized_email, token=token)

    def deliver_verification_token(self, email: str, token: str) -> bool:
        """
        Send the verification token by email, best-effort.

        Delivery failures are logged and reported through the return
        value only; the account stays registered and verifiable.

        Returns:
            True if the sender accepted the message, False otherwise
        """
        try:
            self.email_sender.send_verification_code(email, token)
        except Exception:
            logger.exception("Failed to deliver verification token to %s", email)
            return False
        logger.info("Verification token delivered to %s", email)
        return True

    def verify_token(self, email: str | None, token: str | None) -> VerificationOutcome:
        """
        Check a submitted token and verify the account on match.

        Args:
            email: User's email (will be normalized)
            token: Submitted 5-digit token

        Returns:
            VerificationOutcome; session_token is set for SUCCESS and
            ALREADY_VERIFIED

        Raises:
            MissingFields: If email or token is absent or empty
        """
        if not email or not token:
            raise MissingFields("Email and token are required")

        normalized_email = self._normalize_email(email)
        account = self.repository.find_by_email(normalized_email)
        if account is None:
            logger.info("Verification failed: unknown account %s", normalized_email)
            return VerificationOutcome(VerifyResult.NOT_FOUND)

        if not secrets.compare_digest(account.pending_token.encode(), token.encode()):
            logger.info("Verification failed: invalid token for %s", normalized_email)
            return VerificationOutcome(VerifyResult.INVALID_TOKEN)

        if account.state == AccountState.VERIFIED:
            result = VerifyResult.ALREADY_VERIFIED
        elif self.repository.mark_verified(normalized_email):
            result = VerifyResult.SUCCESS
        else:
            # Lost the race to a concurrent verification of the same account
            result = VerifyResult.ALREADY_VERIFIED

        logger.info("Verification %s for %s", result.value, normalized_email)
        return VerificationOutcome(result, self.session_issuer.issue(normalized_email))

    def get_public_key(self, email: str) -> str | None:
        """Return the account's public key, or None if absent."""
        account = self.repository.find_by_email(self._normalize_email(email))
        if account is None:
            return None
        return account.public_key

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()
