"""
Credential hashing - bcrypt password digests.

Passwords are never stored or compared in plaintext. Hashing errors
propagate to the caller; there is no fallback.
"""

from dataclasses import dataclass

import bcrypt

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class CredentialHasher:
    """Hashes and verifies passwords with bcrypt at a fixed cost factor."""

    cost: int = 10

    def hash(self, plaintext: str) -> str:
        """Return a salted bcrypt digest of the plaintext password."""
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(rounds=self.cost)).decode()

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Check a plaintext password against a stored digest.

        bcrypt's comparison is constant-time. A digest that is not a
        valid bcrypt hash never verifies.
        """
        try:
            return bcrypt.checkpw(plaintext.encode(), digest.encode())
        except ValueError:
            return False
