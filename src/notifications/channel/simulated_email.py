"""Simulated email adapter — used when no mailbox credentials are configured.

Logs the message that would have been sent and reports success without any
network call, so checkout keeps working on a developer machine.
"""

from uuid import uuid4

import structlog

from notifications.channel.email_port import MailMessage, MailTransport

logger = structlog.get_logger(__name__)


class SimulatedEmailAdapter(MailTransport):
    async def send(self, message: MailMessage) -> str:
        message_id = f"simulated-{uuid4().hex[:12]}"
        logger.info(
            "Simulated email send (no SMTP credentials configured)",
            message_id=message_id,
            sender=message.sender,
            to=message.to,
            subject=message.subject,
            body_length=len(message.html_body),
        )
        return message_id
