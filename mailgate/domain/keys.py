"""
RSA keypair issuance for new accounts.

Keys are minted once per registration and stored alongside the
account. There is no rotation.
"""

from dataclasses import dataclass

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

PUBLIC_EXPONENT = 65537


@dataclass(frozen=True)
class Keypair:
    """PEM-encoded RSA keypair (SPKI public, PKCS#8 private)."""

    public_key: str
    private_key: str


def generate_keypair(key_size: int = 2048) -> Keypair:
    """
    Generate an RSA keypair.

    CPU-bound (tens to hundreds of milliseconds at 2048 bits); call
    from a worker thread when serving requests.
    """
    private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=key_size)

    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return Keypair(public_key=public_pem.decode(), private_key=private_pem.decode())
