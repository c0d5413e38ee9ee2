"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the value types that cross them. Adapters
implement these protocols.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class AccountState(str, Enum):
    """
    Verification state of an account.

    State Transitions (forward-only):
    - UNVERIFIED -> VERIFIED (submitted token matches pending token)

    VERIFIED is terminal. There is no expiry transition and no path
    back to UNVERIFIED.
    """

    UNVERIFIED = "UNVERIFIED"
    VERIFIED = "VERIFIED"


class VerifyResult(Enum):
    """
    Result of a verification attempt.

    Used by verify_token() to indicate success or specific failure.
    """

    SUCCESS = "success"
    ALREADY_VERIFIED = "already_verified"
    INVALID_TOKEN = "invalid_token"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Account:
    """Persisted account record, keyed by normalized email."""

    email: str
    name: str
    password_hash: str
    pending_token: str
    verified: bool = False
    public_key: str | None = None
    private_key: str | None = None
    verified_at: datetime | None = None

    @property
    def state(self) -> AccountState:
        return AccountState.VERIFIED if self.verified else AccountState.UNVERIFIED


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def create_account(self, account: Account) -> bool:
        """
        Insert a new, unverified account.

        Args:
            account: Account to persist (email already normalized)

        Returns:
            True if inserted, False if an account with that email exists.
            An existing row is never overwritten.
        """
        ...

    def find_by_email(self, email: str) -> Account | None:
        """
        Look up an account by normalized email.

        Returns:
            The account, or None if no account exists for the email
        """
        ...

    def mark_verified(self, email: str) -> bool:
        """
        Flip an unverified account to verified.

        The write is conditional on the account still being unverified,
        so the transition is applied at most once.

        Returns:
            True if this call performed the transition, False otherwise
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_verification_code(self, email: str, code: str) -> None:
        """
        Send verification code to email address.

        Args:
            email: Recipient email address
            code: 5-digit verification code

        Raises:
            Any transport error. Callers decide whether delivery failure
            is fatal.
        """
        ...
