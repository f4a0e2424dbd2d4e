"""Webhook management operations for the tool and command-line surface.

Each operation returns an OperationResult with display text instead of
raising, so callers can show the outcome as-is.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.models import FilterRules, WebhookConfig
from src.webhook.config_store import (
    ConfigParseError,
    ConfigStore,
    PersistError,
    write_config_file,
)
from src.webhook.dispatcher import Dispatcher
from src.webhook.service import DEFAULT_CONFIG_PATH


@dataclass
class OperationResult:
    text: str
    is_error: bool = False


def _render(data: Any) -> str:
    return json.dumps(data, indent=2)


def update_webhook_config(
    store: ConfigStore,
    url: str,
    auth_token: str | None = None,
    filters: FilterRules | dict[str, Any] | None = None,
    persist: bool = True,
    config_path: str | Path | None = None,
) -> OperationResult:
    """Replace the active webhook config without a restart.

    Null filter fields fall back to their defaults.
    """
    try:
        if isinstance(filters, dict):
            filters = FilterRules.model_validate({k: v for k, v in filters.items() if v is not None})
        config = WebhookConfig(url=url, auth_token=auth_token, filters=filters or FilterRules())
    except ValidationError as e:
        return OperationResult(f"Failed to update webhook config: {e}", is_error=True)

    try:
        store.set(config, persist=persist)
    except PersistError as e:
        return OperationResult(f"Webhook config updated in memory but failed to save: {e}", is_error=True)

    if persist and config_path is not None:
        try:
            write_config_file(config_path, config, create_parents=True)
        except OSError as e:
            return OperationResult(
                f"Webhook config updated in memory but failed to save to custom path: {e}",
                is_error=True,
            )

    filters_json = _render(config.filters.model_dump(mode="json", by_alias=True))
    return OperationResult(
        "Webhook configuration updated successfully!\n"
        f"URL: {url}\n"
        f"Auth Token: {'***' if auth_token else 'None'}\n"
        f"Save to File: {persist}\n"
        f"Filters: {filters_json}",
    )


def get_webhook_config(store: ConfigStore) -> OperationResult:
    config = store.get()
    if config is None:
        return OperationResult("No webhook configuration is currently active")
    return OperationResult(f"Current Webhook Configuration:\n{_render(config.to_display_dict())}")


def disable_webhook(store: ConfigStore, persist: bool = True) -> OperationResult:
    try:
        store.set(None, persist=persist)
    except PersistError as e:
        return OperationResult(f"Webhook disabled in memory but failed to save: {e}", is_error=True)
    return OperationResult("Webhook has been disabled successfully")


def reload_webhook_config(
    store: ConfigStore,
    config_path: str | Path | None = None,
) -> OperationResult:
    """Load a config file into the store. The file is not rewritten."""
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    if not path.exists():
        return OperationResult(f"Webhook config file not found at: {path}", is_error=True)
    try:
        config = store.load_from_file(path)
    except (ConfigParseError, OSError) as e:
        return OperationResult(f"Failed to reload webhook config: {e}", is_error=True)

    store.set(config, persist=False)
    rendered = _render(config.to_display_dict() if config is not None else None)
    return OperationResult(f"Webhook configuration reloaded from file: {path}\n{rendered}")


async def test_webhook(
    dispatcher: Dispatcher,
    url: str,
    auth_token: str | None = None,
) -> OperationResult:
    """Send a sample payload to ``url``, independent of the active config."""
    result = await dispatcher.test(url, auth_token)
    if result.status_code is None:
        return OperationResult(f"Webhook test failed: {result.description}", is_error=True)
    return OperationResult(
        f"Webhook test completed. Status: {result.description}",
        is_error=not result.ok,
    )
