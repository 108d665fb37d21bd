"""SendGrid adapter: delivers email through the SendGrid v3 mail API."""

import httpx
import structlog

from notifications.channel.mail_port import MailTransport

logger = structlog.get_logger(__name__)

SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"


class SendGridAdapter(MailTransport):
    def __init__(
        self,
        api_key: str,
        api_url: str = SENDGRID_API_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self._client = client
        self.timeout = timeout

    def _payload(self, to, from_email, subject, body) -> dict:
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": from_email},
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
        }

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        return await client.post(
            self.api_url,
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

    async def send(
        self,
        to: str,
        from_email: str,
        subject: str,
        body: str,
    ) -> dict:
        payload = self._payload(to, from_email, subject, body)

        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=10.0)) as client:
                    response = await self._post(client, payload)
        except httpx.HTTPError as exc:
            logger.warning("SendGrid request failed", to=to, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        if response.status_code >= 400:
            error = f"SendGrid returned {response.status_code}: {response.text[:200]}"
            logger.warning("SendGrid rejected message", to=to, status_code=response.status_code)
            return {"message_id": None, "status": "failed", "error": error}

        return {
            "message_id": response.headers.get("X-Message-Id"),
            "status": "sent",
        }
