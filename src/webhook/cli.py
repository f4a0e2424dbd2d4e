"""Click CLI for managing the webhook configuration."""

from __future__ import annotations

import asyncio
import logging

import click

from src.webhook import operations
from src.webhook.config_store import ConfigStore
from src.webhook.dispatcher import DEFAULT_TIMEOUT_SECONDS, Dispatcher
from src.webhook.operations import OperationResult
from src.webhook.service import DEFAULT_CONFIG_PATH


def _emit(result: OperationResult) -> None:
    click.echo(result.text, err=result.is_error)
    if result.is_error:
        raise SystemExit(1)


@click.group()
@click.option(
    "--config", "config_path", default=DEFAULT_CONFIG_PATH, envvar="WEBHOOK_CONFIG_PATH",
    show_default=True, help="Webhook config JSON file.",
)
@click.option(
    "--timeout", default=DEFAULT_TIMEOUT_SECONDS, type=float, envvar="WEBHOOK_TIMEOUT_SECONDS",
    show_default=True, help="Delivery timeout in seconds.",
)
@click.option("--log-level", default="WARNING", help="Logging level.")
@click.pass_context
def cli(ctx: click.Context, config_path: str, timeout: float, log_level: str) -> None:
    """Chat webhook relay configuration CLI."""
    logging.basicConfig(level=log_level.upper())
    ctx.ensure_object(dict)
    store = ConfigStore()
    store.init(config_path)
    ctx.obj["store"] = store
    ctx.obj["config_path"] = config_path
    ctx.obj["dispatcher"] = Dispatcher(timeout=timeout)


@cli.command()
@click.argument("url")
@click.option("--auth-token", default=None, help="Bearer token sent with each delivery.")
@click.option("--allow-number", "allowed_numbers", multiple=True, help="Only forward these senders.")
@click.option("--private/--no-private", "allow_private", default=True, help="Forward private chats.")
@click.option("--groups/--no-groups", "allow_groups", default=True, help="Forward group chats.")
@click.option("--copy-to", default=None, help="Also write the config to this path.")
@click.pass_context
def update(
    ctx: click.Context,
    url: str,
    auth_token: str | None,
    allowed_numbers: tuple[str, ...],
    allow_private: bool,
    allow_groups: bool,
    copy_to: str | None,
) -> None:
    """Set the webhook URL, token and filters and write them to the --config file."""
    filters = {
        "allowedNumbers": list(allowed_numbers),
        "allowPrivate": allow_private,
        "allowGroups": allow_groups,
    }
    _emit(operations.update_webhook_config(
        ctx.obj["store"], url,
        auth_token=auth_token,
        filters=filters,
        config_path=copy_to,
    ))


@cli.command()
@click.pass_context
def get(ctx: click.Context) -> None:
    """Show the active webhook configuration."""
    _emit(operations.get_webhook_config(ctx.obj["store"]))


@cli.command()
@click.pass_context
def disable(ctx: click.Context) -> None:
    """Disable webhook delivery by writing null to the --config file."""
    _emit(operations.disable_webhook(ctx.obj["store"]))


@cli.command()
@click.argument("path", required=False)
@click.pass_context
def reload(ctx: click.Context, path: str | None) -> None:
    """Load a webhook config file (default: the --config file)."""
    _emit(operations.reload_webhook_config(ctx.obj["store"], path or ctx.obj["config_path"]))


@cli.command("test")
@click.argument("url")
@click.option("--auth-token", default=None, help="Bearer token for the test request.")
@click.pass_context
def test_command(ctx: click.Context, url: str, auth_token: str | None) -> None:
    """Send a sample payload to URL."""
    _emit(asyncio.run(operations.test_webhook(ctx.obj["dispatcher"], url, auth_token)))
