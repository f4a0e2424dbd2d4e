"""Webhook relay pipeline for inbound chat messages.

Pipeline stages, strictly in order for one message:
1. Config snapshot (disabled webhook stops here)
2. Filter on chat kind and sender number
3. Payload build (media, quoted message, group roster, mentions)
4. Delivery with a fresh config snapshot

No ordering is guaranteed across messages. A config change that lands
between stages 2 and 4 is visible to stage 4.
"""

from __future__ import annotations

import logging

from src.webhook.client import ChatMessage
from src.webhook.config_store import ConfigStore
from src.webhook.dispatcher import Dispatcher
from src.webhook.filters import accepts, is_group_chat
from src.webhook.models import DeliveryResult
from src.webhook.payload import PayloadBuilder

logger = logging.getLogger(__name__)


class WebhookRelay:
    """Forwards accepted inbound messages to the configured webhook."""

    def __init__(
        self,
        store: ConfigStore,
        builder: PayloadBuilder,
        dispatcher: Dispatcher,
    ) -> None:
        self._store = store
        self._builder = builder
        self._dispatcher = dispatcher

    async def handle_message(self, message: ChatMessage) -> DeliveryResult | None:
        """Run the pipeline. Returns None when nothing was delivered."""
        config = self._store.get()
        if config is None:
            return None

        contact = await message.get_contact()
        is_group = is_group_chat(message.from_)
        if not accepts(config.filters, is_group, contact.number):
            logger.debug(
                "Message %s from %s filtered out (group=%s)",
                message.id, contact.number, is_group,
            )
            return None

        payload = await self._builder.build(message, contact, is_group)

        config = self._store.get()
        if config is None:
            logger.info("Webhook disabled before message %s could be delivered", message.id)
            return None
        return await self._dispatcher.send(config, payload)

    async def on_message(self, message: ChatMessage) -> None:
        """Client event handler. Failures are logged, never propagated."""
        try:
            await self.handle_message(message)
        except Exception:
            logger.exception("Error processing message %s for webhook", getattr(message, "id", "?"))
