"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers verification tokens through an authenticated SMTP relay
(STARTTLS on port 587 by default) using the standard library client.
"""

import logging
import smtplib
from email.message import EmailMessage

logger = logging.getLogger(__name__)

SUBJECT = "Email verification"


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    Opens one connection per message. Transport errors propagate to the
    caller, which owns the delivery policy.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_addr: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_addr = from_addr or username
        self._use_tls = use_tls
        self._timeout = timeout

    def build_message(self, email: str, code: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = SUBJECT
        msg["From"] = self._from_addr
        msg["To"] = email
        msg.set_content(f"Your verification token is: {code}")
        return msg

    def send_verification_code(self, email: str, code: str) -> None:
        """
        Send the verification token to the recipient.

        Raises:
            smtplib.SMTPException, OSError: On connection, auth or delivery failure
        """
        msg = self.build_message(email, code)

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._use_tls:
                server.starttls()
            server.login(self._username, self._password)
            server.send_message(msg)

        logger.info("Verification email sent to %s via %s:%s", email, self._host, self._port)
