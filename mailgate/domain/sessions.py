"""
Session credential issuance - signed JWTs for verified accounts.

A session credential binds an email and an issued-at time, is valid for
a fixed window, and is signed with a process-wide secret.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from .exceptions import InvalidCredential


@dataclass(frozen=True)
class SessionIssuer:
    """Signs and validates session credentials."""

    secret: str
    ttl_seconds: int = 3600
    algorithm: str = "HS256"

    def issue(self, email: str) -> str:
        """Sign a credential for the email, valid for ttl_seconds."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": email,
            "email": email,
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, credential: str) -> str:
        """
        Validate a credential and return the email it was issued for.

        Raises:
            InvalidCredential: Signature mismatch, malformed token, expiry,
                or missing claims. The cause is not distinguished.
        """
        try:
            payload = jwt.decode(
                credential,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.InvalidTokenError:
            raise InvalidCredential("Invalid credential") from None

        email = payload.get("email")
        if not email or email != payload["sub"]:
            raise InvalidCredential("Invalid credential")
        return email
