"""Email channel port — abstract interface for mail transports."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MailMessage:
    sender: str
    to: str
    subject: str
    html_body: str


class MailTransportError(Exception):
    """The transport reported that a message could not be sent."""


class MailTransport(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    async def send(self, message: MailMessage) -> str:
        """Send a message and return the transport's message id.

        Raises:
            MailTransportError (or any other exception) when the send fails.
        """
        ...
