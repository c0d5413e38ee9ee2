"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class InvalidRegistrationInput(RegistrationError):
    """Client supplied input that cannot be processed."""

    pass


class MissingFields(InvalidRegistrationInput):
    """One or more required fields are absent or empty."""

    pass


class PasswordMismatch(InvalidRegistrationInput):
    """Password and confirmation do not match."""

    pass


class PasswordTooLong(InvalidRegistrationInput):
    """Password exceeds the hasher's input limit."""

    pass


class EmailAlreadyRegistered(RegistrationError):
    """An account already exists for this email."""

    pass


class InvalidCredential(RegistrationError):
    """Session credential is malformed, forged, or expired."""

    pass
