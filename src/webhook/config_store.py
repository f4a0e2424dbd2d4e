"""Webhook configuration store with JSON file persistence.

This module provides:
- ConfigStore, the single owner of the active webhook configuration
- Helpers to read and write the backing JSON file
- The configuration error taxonomy
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from src.models import WebhookConfig

logger = logging.getLogger(__name__)


class WebhookConfigError(Exception):
    """Base class for webhook configuration errors."""

    pass


class ConfigNotFoundError(WebhookConfigError):
    """Raised when a reload targets a config file that does not exist."""

    pass


class ConfigParseError(WebhookConfigError):
    """Raised when a config file is not valid JSON or not a valid config."""

    pass


class PersistError(WebhookConfigError):
    """Raised when the config could not be written to its backing file.

    The in-memory update has already been applied when this is raised.
    """

    pass


def load_config_file(path: str | Path) -> WebhookConfig | None:
    """Parse a webhook config file.

    Returns None when the file does not exist or holds JSON ``null``
    (a persisted disabled state).
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in webhook config {path}: {e}") from e
    if data is None:
        return None
    try:
        return WebhookConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"Invalid webhook config in {path}: {e}") from e


def write_config_file(
    path: str | Path,
    config: WebhookConfig | None,
    create_parents: bool = False,
) -> None:
    """Replace the file contents with the formatted JSON form of ``config``."""
    path = Path(path)
    if create_parents:
        path.parent.mkdir(parents=True, exist_ok=True)
    data = config.to_file_dict() if config is not None else None
    path.write_text(json.dumps(data, indent=2))


class ConfigStore:
    """Holds the one authoritative webhook configuration.

    Readers get an immutable snapshot from ``get()``; writers replace it
    wholesale through ``set()``. ``None`` means the webhook is disabled.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._config: WebhookConfig | None = None

    @property
    def path(self) -> Path | None:
        return self._path

    def init(self, path: str | Path) -> WebhookConfig | None:
        """Bind the store to ``path`` and load it.

        A missing or malformed file leaves the webhook disabled.
        """
        self._path = Path(path)
        try:
            config = load_config_file(self._path)
        except (ConfigParseError, OSError) as e:
            logger.error("Failed to load webhook config: %s", e)
            config = None
        if config is None:
            logger.info("No webhook config at %s, webhook disabled", self._path)
        else:
            logger.info("Webhook config loaded from %s", self._path)
        self._config = config
        return config

    def teardown(self) -> None:
        self._config = None

    def get(self) -> WebhookConfig | None:
        return self._config

    def set(self, config: WebhookConfig | None, persist: bool = True) -> None:
        """Replace the active configuration, optionally writing it through.

        Raises:
            PersistError: the file write failed. The new value is active anyway.
        """
        self._config = config
        if config is None:
            logger.info("Webhook disabled")
        else:
            logger.info("Webhook config updated")

        if not persist or self._path is None:
            return
        try:
            write_config_file(self._path, config, create_parents=True)
        except OSError as e:
            logger.error("Failed to save webhook config to %s: %s", self._path, e)
            raise PersistError(f"Failed to save webhook config to {self._path}: {e}") from e
        logger.info("Webhook config saved to %s", self._path)

    def load_from_file(self, path: str | Path | None = None) -> WebhookConfig | None:
        """Parse ``path`` (default: the backing file) without touching the store."""
        target = path if path is not None else self._path
        if target is None:
            return None
        return load_config_file(target)

    def reload(self) -> WebhookConfig | None:
        """Re-read the backing file into the store without writing it back."""
        if self._path is None or not self._path.exists():
            raise ConfigNotFoundError(f"Webhook config file not found at: {self._path}")
        config = load_config_file(self._path)
        self.set(config, persist=False)
        return config

    def on_file_changed(self, path: Path) -> None:
        """Watcher callback. A bad or vanished file keeps the current value."""
        logger.info("Webhook config file changed, reloading...")
        if not path.exists():
            logger.warning("Webhook config file %s disappeared, keeping current config", path)
            return
        try:
            config = load_config_file(path)
        except (ConfigParseError, OSError) as e:
            logger.error("Failed to reload webhook config: %s", e)
            return
        self.set(config, persist=False)
        logger.info("Webhook config reloaded successfully")
