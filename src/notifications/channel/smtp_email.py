"""SMTP email adapter — sends through an authenticated mailbox (Gmail by default).

smtplib is blocking, so each send runs in a worker thread and the event loop
stays free while the SMTP conversation is in flight.
"""

import asyncio
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from notifications.channel.email_port import MailMessage, MailTransport, MailTransportError

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(MailTransport):
    def __init__(
        self,
        username: str,
        password: str,
        host: str = "smtp.gmail.com",
        port: int = 465,
        timeout: float = 30.0,
    ):
        self.username = username
        self.password = password
        self.host = host
        self.port = port
        self.timeout = timeout

    def _build(self, message: MailMessage) -> EmailMessage:
        email = EmailMessage()
        email["From"] = message.sender
        email["To"] = message.to
        email["Subject"] = message.subject
        email["Message-ID"] = make_msgid()
        email.set_content("Your mail client does not display HTML messages.")
        email.add_alternative(message.html_body, subtype="html")
        return email

    def _send_blocking(self, email: EmailMessage) -> None:
        with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.login(self.username, self.password)
            smtp.send_message(email)

    async def send(self, message: MailMessage) -> str:
        email = self._build(message)
        try:
            await asyncio.to_thread(self._send_blocking, email)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP send failed", to=message.to, host=self.host, error=str(exc))
            raise MailTransportError(str(exc)) from exc
        return email["Message-ID"]
