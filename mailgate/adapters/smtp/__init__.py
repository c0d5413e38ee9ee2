"""Email sender adapters - Mail transport implementations."""

from .console import ConsoleEmailSender
from .smtp import SmtpEmailSender

__all__ = ["ConsoleEmailSender", "SmtpEmailSender"]
