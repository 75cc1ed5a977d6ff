"""Mail transport registry.

Provides get_transport() / set_transport() to swap implementations:
- SmtpEmailAdapter when SMTP_EMAIL and SMTP_PASSWORD are both set
- SimulatedEmailAdapter when either credential is missing
- FakeEmailAdapter when MAIL_TRANSPORT=fake (tests)
"""

import os

from notifications.channel.email_port import MailTransport

_transport_instance: MailTransport | None = None


def smtp_credentials() -> tuple[str, str] | None:
    username = os.environ.get("SMTP_EMAIL", "").strip()
    password = os.environ.get("SMTP_PASSWORD", "").strip()
    if username and password:
        return username, password
    return None


def get_transport() -> MailTransport:
    """Return the configured mail transport (singleton)."""
    global _transport_instance
    if _transport_instance is None:
        adapter = os.environ.get("MAIL_TRANSPORT", "smtp").lower()
        credentials = smtp_credentials()

        if adapter == "fake":
            from notifications.channel.fake_email import FakeEmailAdapter

            _transport_instance = FakeEmailAdapter()
        elif adapter != "smtp":
            raise ValueError(f"Unknown mail transport: {adapter}")
        elif credentials is None:
            from notifications.channel.simulated_email import SimulatedEmailAdapter

            _transport_instance = SimulatedEmailAdapter()
        else:
            from notifications.channel.smtp_email import SmtpEmailAdapter

            username, password = credentials
            _transport_instance = SmtpEmailAdapter(
                username=username,
                password=password,
                host=os.environ.get("SMTP_HOST", "smtp.gmail.com"),
                port=int(os.environ.get("SMTP_PORT", "465")),
            )
    return _transport_instance


def set_transport(transport: MailTransport) -> None:
    """Override the active mail transport (useful for tests)."""
    global _transport_instance
    _transport_instance = transport


def reset_transport() -> None:
    """Reset the transport singleton (useful for testing)."""
    global _transport_instance
    _transport_instance = None
