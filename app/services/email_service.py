"""SMTP mailer for officer assignment emails."""

import logging
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid
from typing import Optional

from app.core.settings import settings

logger = logging.getLogger(__name__)


class Mailer(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, html: str) -> bool:
        """Send one HTML email. Returns False on failure, never raises."""
        raise NotImplementedError


class SmtpMailer(Mailer):
    """
    Port 465 uses implicit TLS (SMTP_SSL); any other port uses STARTTLS.
    Without SMTP_HOST the mailer is disabled and every send returns False.
    """

    def __init__(
        self,
        host: Optional[str],
        port: int = 465,
        username: Optional[str] = None,
        password: Optional[str] = None,
        from_name: str = "CivicPulse",
        timeout_seconds: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_name = from_name
        self.timeout_seconds = timeout_seconds

    def _build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.username or ""))
        msg["To"] = to
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid()
        msg.set_content("This message requires an HTML-capable email client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def send(self, to: str, subject: str, html: str) -> bool:
        if not to:
            return False
        if not self.host:
            logger.warning("SMTP_HOST not configured; skipping email")
            return False

        msg = self._build_message(to, subject, html)
        context = ssl.create_default_context()
        try:
            if self.port == 465:
                with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout_seconds, context=context) as server:
                    self._deliver(server, msg)
            else:
                with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as server:
                    server.starttls(context=context)
                    self._deliver(server, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ Email failed to {to}: {e}")
            return False

        logger.info(f"✅ Email sent to: {to}")
        return True

    def _deliver(self, server: smtplib.SMTP, msg: EmailMessage) -> None:
        if self.username and self.password:
            server.login(self.username, self.password)
        server.send_message(msg)


def build_mailer() -> Mailer:
    return SmtpMailer(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASS,
        from_name=settings.MAIL_FROM_NAME,
        timeout_seconds=settings.SMTP_TIMEOUT_SECONDS,
    )
