"""Outbound delivery of payloads to the configured webhook URL."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from src.models import MessageType, WebhookConfig
from src.webhook.models import DeliveryResult, MessageContent, WebhookPayload

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

_TEST_TEXT = "This is a test message"


def build_test_payload() -> WebhookPayload:
    """Synthetic private text message sent to check an endpoint."""
    return WebhookPayload(
        sender="1234567890",
        name="Test User",
        message=_TEST_TEXT,
        is_group=False,
        timestamp=int(time.time()),
        message_id="test_message_id",
        from_me=False,
        type="text",
        device_type="android",
        message_type=MessageType.TEXT,
        content=MessageContent(text=_TEST_TEXT),
    )


def _headers(auth_token: str | None) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


class Dispatcher:
    """POSTs payloads to a webhook. Never retries, never raises on failure."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def send(self, config: WebhookConfig, payload: WebhookPayload) -> DeliveryResult:
        """Deliver ``payload`` to ``config.url``."""
        result = await self._post(config.url, payload.to_json_dict(), config.auth_token)
        if result.status_code is None:
            logger.error("Error sending webhook for message %s: %s", payload.message_id, result.description)
        elif not result.ok:
            logger.warning("Webhook request failed with status %d", result.status_code)
        return result

    async def test(self, url: str, auth_token: str | None = None) -> DeliveryResult:
        """Send the synthetic test payload and report the raw outcome."""
        return await self._post(url, build_test_payload().to_json_dict(), auth_token)

    async def _post(
        self,
        url: str,
        body: dict[str, Any],
        auth_token: str | None,
    ) -> DeliveryResult:
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout,
            ) as client:
                resp = await client.post(url, json=body, headers=_headers(auth_token))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return DeliveryResult(ok=False, status_code=None, description=str(e) or type(e).__name__)

        description = f"{resp.status_code} {resp.reason_phrase}".strip()
        return DeliveryResult(
            ok=200 <= resp.status_code < 300,
            status_code=resp.status_code,
            description=description,
        )
