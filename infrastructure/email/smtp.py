"""SMTP implementation of EmailProvider.

Builds a multipart/alternative message (plain text + HTML) and sends it with
smtplib on a worker thread, so the event loop is never blocked on the relay.
Defaults target Gmail with STARTTLS on port 587.
"""

from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from config import EmailSettings
from shared.logging import get_logger, mask_email

log = get_logger(__name__)


class SmtpMailProvider:
    def __init__(self, settings: EmailSettings) -> None:
        self._settings = settings

    @property
    def enabled(self) -> bool:
        s = self._settings
        return bool(s.smtp_host and s.smtp_port > 0 and s.smtp_user and s.smtp_password)

    def build_message(
        self, to_email: str, subject: str, text_body: str, html_body: str
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr(
            (self._settings.email_from_name, self._settings.email_from_address)
        )
        msg["To"] = to_email
        msg.set_content(text_body)
        msg.add_alternative(html_body, subtype="html")
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        s = self._settings
        with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=s.email_timeout_seconds) as server:
            if s.smtp_starttls:
                server.starttls()
            server.login(s.smtp_user, s.smtp_password)
            server.send_message(msg)

    async def send_mail(
        self, to_email: str, subject: str, text_body: str, html_body: str
    ) -> bool:
        if not self.enabled:
            log.error("smtp_mail_send_failed", reason="smtp_not_configured")
            return False

        msg = self.build_message(to_email, subject, text_body, html_body)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            log.error(
                "email_send_error",
                to_email=mask_email(to_email),
                subject=subject,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        log.info("email_sent_success", to_email=mask_email(to_email), subject=subject)
        return True
