"""Lifecycle owner for the webhook subsystem."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from src.webhook.config_store import ConfigStore
from src.webhook.dispatcher import DEFAULT_TIMEOUT_SECONDS, Dispatcher
from src.webhook.payload import PayloadBuilder
from src.webhook.relay import WebhookRelay
from src.webhook.watcher import ConfigWatcher

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".wwebjs_auth/webhook.json"
DEFAULT_WATCH_INTERVAL_SECONDS = 1.0


class WebhookService:
    """Wires store, watcher and relay together.

    ``init()`` must be awaited from inside the running event loop that will
    also deliver client events, since the watcher polls on that loop.
    """

    def __init__(
        self,
        config_path: str | Path = DEFAULT_CONFIG_PATH,
        dispatcher: Dispatcher | None = None,
        watch_interval: float = DEFAULT_WATCH_INTERVAL_SECONDS,
    ) -> None:
        self.config_path = Path(config_path)
        self.store = ConfigStore()
        self.dispatcher = dispatcher or Dispatcher()
        self.relay = WebhookRelay(self.store, PayloadBuilder(), self.dispatcher)
        self._watch_interval = watch_interval
        self._watcher: ConfigWatcher | None = None

    @classmethod
    def from_env(cls) -> WebhookService:
        """Create a WebhookService configured from environment variables."""
        config_path = os.environ.get("WEBHOOK_CONFIG_PATH", DEFAULT_CONFIG_PATH)
        timeout = float(os.environ.get("WEBHOOK_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)))
        interval = float(
            os.environ.get("WEBHOOK_WATCH_INTERVAL_SECONDS", str(DEFAULT_WATCH_INTERVAL_SECONDS)),
        )
        return cls(
            config_path=config_path,
            dispatcher=Dispatcher(timeout=timeout),
            watch_interval=interval,
        )

    @property
    def watcher(self) -> ConfigWatcher | None:
        return self._watcher

    async def init(self, config_path: str | Path | None = None) -> None:
        """Load the config and (re)start watching. Safe to call repeatedly."""
        if self._watcher is not None:
            await self._watcher.aclose()
            self._watcher = None
        if config_path is not None:
            self.config_path = Path(config_path)

        self.store.init(self.config_path)
        watcher = ConfigWatcher(self.config_path, interval=self._watch_interval)
        watcher.subscribe(self.store.on_file_changed)
        if watcher.start():
            self._watcher = watcher

    async def teardown(self) -> None:
        if self._watcher is not None:
            await self._watcher.aclose()
            self._watcher = None
        self.store.teardown()
        logger.info("Webhook service stopped")
