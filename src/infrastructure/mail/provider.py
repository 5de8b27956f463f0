"""Mail delivery protocol."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class MailMessage:
    """A single outgoing email with HTML and plain-text bodies."""

    to: str
    subject: str
    html: str
    text: str


class IMailer(Protocol):
    """Protocol for mail delivery collaborators."""

    async def send(self, message: MailMessage) -> bool:
        """
        Deliver a message.

        Args:
            message: The message to deliver

        Returns:
            True if the provider accepted the message, False otherwise
        """
        ...
