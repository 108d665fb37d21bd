"""Mail transport port: abstract interface for email delivery."""

from abc import ABC, abstractmethod


class MailTransport(ABC):
    """Abstract interface for mail transport adapters.

    One call is one delivery attempt to one recipient. Adapters do not retry.
    """

    @abstractmethod
    async def send(
        self,
        to: str,
        from_email: str,
        subject: str,
        body: str,
    ) -> dict:
        """Send an email message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
