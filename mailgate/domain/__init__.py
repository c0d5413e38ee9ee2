"""
Domain layer - Business logic with zero web or database framework imports.

This package contains the core business logic for account registration
and email verification. It defines its own port interfaces for
infrastructure abstraction, keeping adapters swappable.
"""

from .credentials import CredentialHasher
from .exceptions import (
    EmailAlreadyRegistered,
    InvalidCredential,
    InvalidRegistrationInput,
    MissingFields,
    PasswordMismatch,
    PasswordTooLong,
    RegistrationError,
)
from .keys import Keypair, generate_keypair
from .ports import Account, AccountRepository, AccountState, EmailSender, VerifyResult
from .registration import PendingVerification, RegistrationService, VerificationOutcome
from .sessions import SessionIssuer
from .tokens import generate_verification_token

__all__ = [
    "Account",
    "AccountRepository",
    "AccountState",
    "CredentialHasher",
    "EmailAlreadyRegistered",
    "EmailSender",
    "InvalidCredential",
    "InvalidRegistrationInput",
    "Keypair",
    "MissingFields",
    "PasswordMismatch",
    "PasswordTooLong",
    "PendingVerification",
    "RegistrationError",
    "RegistrationService",
    "SessionIssuer",
    "VerificationOutcome",
    "VerifyResult",
    "generate_keypair",
    "generate_verification_token",
]
