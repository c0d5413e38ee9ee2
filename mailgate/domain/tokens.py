"""
Verification token generation.
"""

import secrets

TOKEN_MIN = 10000
TOKEN_MAX = 99999  # exclusive


def generate_verification_token() -> str:
    """
    Generate a cryptographically secure 5-digit verification token.

    Drawn uniformly from [10000, 99999) using the secrets module.
    Returned as a string so it is stored and compared opaquely.
    """
    return str(TOKEN_MIN + secrets.randbelow(TOKEN_MAX - TOKEN_MIN))
