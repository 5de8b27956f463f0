"""Mail delivery through the Resend HTTP API."""

import logging

import httpx

from core.config import settings
from infrastructure.mail.provider import MailMessage

logger = logging.getLogger(__name__)


class ResendMailer:
    """Send email with a single POST to the Resend ``/emails`` endpoint.

    Delivery problems are reported through the return value; transport and
    HTTP errors are logged and never raised to the caller.
    """

    def __init__(
        self,
        api_key: str = settings.resend_api_key,
        api_url: str = settings.resend_api_url,
        sender: str = settings.mail_from,
        timeout: float = settings.mail_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._sender = sender
        self._timeout = timeout
        self._transport = transport

        if not self._api_key:
            logger.warning("Mail delivery not configured: RESEND_API_KEY is empty")

    async def send(self, message: MailMessage) -> bool:
        """POST the message to Resend. Returns True on a 2xx response."""
        if not self._api_key:
            logger.error("Cannot send email to %s: mail delivery not configured", message.to)
            return False

        payload = {
            "from": self._sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Resend rejected email to %s: %s %s",
                message.to,
                e.response.status_code,
                e.response.text,
            )
            return False
        except httpx.HTTPError:
            logger.exception("Failed to send email to %s", message.to)
            return False

        logger.info("Email sent to %s", message.to)
        return True
