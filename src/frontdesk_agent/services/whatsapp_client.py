"""WhatsApp client — async HTTP sender for outbound text messages.

Messages go out through one of two transports:

* a WhatsApp Web bridge (``BRIDGE_SEND_URL``), the companion process that
  also pushes inbound events and the pairing QR code to this service;
* the Meta WhatsApp Cloud API, when a Graph API token is configured.

With neither configured the reply is only logged, which is how the agent
runs in development.
"""

from __future__ import annotations

import logging

import httpx

from frontdesk_agent.config import settings

logger = logging.getLogger(__name__)

GRAPH_API_BASE_URL = "https://graph.facebook.com"


class WhatsAppClient:
    """Async wrapper around the outbound message APIs."""

    def __init__(
        self,
        api_token: str | None = None,
        phone_number_id: str | None = None,
        bridge_send_url: str | None = None,
        bridge_token: str | None = None,
        api_version: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_token = settings.whatsapp_api_token if api_token is None else api_token
        self._phone_number_id = phone_number_id or settings.whatsapp_phone_number_id
        self._bridge_send_url = (
            settings.bridge_send_url if bridge_send_url is None else bridge_send_url
        )
        self._bridge_token = settings.bridge_token if bridge_token is None else bridge_token
        self._api_version = api_version or settings.whatsapp_api_version
        self._transport = transport

    async def send_text(self, conversation_id: str, text: str) -> bool:
        """Send *text* to *conversation_id*.

        Returns ``True`` if the transport accepted the message.
        """
        if self._bridge_send_url:
            return await self._post(
                self._bridge_send_url,
                {"to": conversation_id, "text": text},
                {"X-Bridge-Token": self._bridge_token} if self._bridge_token else {},
                conversation_id,
            )

        if self._api_token:
            url = (
                f"{GRAPH_API_BASE_URL}/{self._api_version}/"
                f"{self._phone_number_id}/messages"
            )
            payload = {
                "messaging_product": "whatsapp",
                "to": conversation_id,
                "type": "text",
                "text": {"body": text},
            }
            headers = {"Authorization": f"Bearer {self._api_token}"}
            return await self._post(url, payload, headers, conversation_id)

        logger.warning("No WhatsApp transport configured — reply logged only: %s", text)
        return True

    async def _post(
        self, url: str, payload: dict, headers: dict, conversation_id: str
    ) -> bool:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.exception("Send request to %s failed: %s", conversation_id, exc)
            return False

        if resp.is_success:
            logger.info("Reply sent to %s", conversation_id)
            return True

        logger.error(
            "Failed to send reply to %s: %s %s",
            conversation_id,
            resp.status_code,
            resp.text,
        )
        return False
