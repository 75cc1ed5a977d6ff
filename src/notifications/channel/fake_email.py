"""Fake email adapter — records sent emails for testing."""

from uuid import uuid4

from notifications.channel.email_port import MailMessage, MailTransport, MailTransportError


class FakeEmailAdapter(MailTransport):
    """Email adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.attempts: list[MailMessage] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.fail_recipients: set[str] = set()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        fail_recipients: set[str] | None = None,
    ):
        """Configure the fake adapter behavior for testing.

        ``fail_recipients`` makes only sends to those addresses fail.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.fail_recipients = set(fail_recipients or ())

    async def send(self, message: MailMessage) -> str:
        self.attempts.append(message)

        if not self.should_succeed or message.to in self.fail_recipients:
            raise MailTransportError(self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "from": message.sender,
                "to": message.to,
                "subject": message.subject,
                "html_body": message.html_body,
            }
        )
        return message_id

    def reset(self):
        """Clear recorded emails and restore the default behaviour."""
        self.sent_emails.clear()
        self.attempts.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.fail_recipients = set()
