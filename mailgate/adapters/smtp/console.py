"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging verification tokens instead of sending mail.
Used when no SMTP credentials are configured.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def send_verification_code(self, email: str, code: str) -> None:
        """
        Log verification token to console (simulates email delivery).

        Args:
            email: Recipient email address (normalized by domain layer)
            code: 5-digit verification token
        """
        logger.info("[VERIFICATION] Email: %s Token: %s", email, code)
