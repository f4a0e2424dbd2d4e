"""Shared test fixtures for chat-webhook-relay."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest

from src.models import FilterRules, WebhookConfig

# --- Fake messaging client objects ---


@dataclass
class FakeContact:
    number: str = "15551234567"
    pushname: str | None = "Alice"


@dataclass
class FakeParticipant:
    id: str
    number: str
    name: str | None = None
    is_admin: bool = False


@dataclass
class FakeChat:
    id: str = "120363000000000000@g.us"
    name: str = "Family"
    participants: list[FakeParticipant] = field(default_factory=list)


@dataclass
class FakeMedia:
    mimetype: str = "image/jpeg"
    data: str = "aGVsbG8="
    filename: str | None = None
    filesize: int | None = 5


@dataclass
class FakeLocation:
    latitude: float
    longitude: float
    name: str | None = None
    address: str | None = None


@dataclass
class FakeInvite:
    invite_code: str
    invite_expiration: int | None = None


@dataclass
class FakeMessage:
    id: str = "false_15551234567@c.us_3EB0C767D26A"
    body: str = "hello"
    type: str = "chat"
    timestamp: int = 1_700_000_000
    from_: str = "15551234567@c.us"
    from_me: bool = False
    device_type: str | None = "android"
    is_forwarded: bool = False
    is_starred: bool = False
    has_quoted_msg: bool = False
    has_reaction: bool = False
    is_ephemeral: bool = False
    has_media: bool = False
    duration: int | None = None
    filename: str | None = None
    location: FakeLocation | None = None
    vcards: list[str] = field(default_factory=list)
    quoted_msg_id: str | None = None
    invite_v4: FakeInvite | None = None
    mentioned_ids: list[str] = field(default_factory=list)
    # Collaborator behaviour
    contact: FakeContact = field(default_factory=FakeContact)
    media: FakeMedia | None = None
    media_error: Exception | None = None
    quoted: FakeMessage | None = None
    quoted_error: Exception | None = None
    chat: FakeChat | None = None
    chat_error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def get_contact(self) -> FakeContact:
        self.calls.append("get_contact")
        return self.contact

    async def download_media(self) -> FakeMedia | None:
        self.calls.append("download_media")
        if self.media_error is not None:
            raise self.media_error
        return self.media

    async def get_quoted_message(self) -> FakeMessage:
        self.calls.append("get_quoted_message")
        if self.quoted_error is not None:
            raise self.quoted_error
        if self.quoted is None:
            raise RuntimeError("no quoted message")
        return self.quoted

    async def get_chat(self) -> FakeChat:
        self.calls.append("get_chat")
        if self.chat_error is not None:
            raise self.chat_error
        if self.chat is None:
            raise RuntimeError("chat not found")
        return self.chat


# --- Factory functions for test data ---

HOOK_URL = "https://example.test/hook"


def make_webhook_config(**kwargs: Any) -> WebhookConfig:
    """Factory for WebhookConfig with sensible defaults."""
    defaults: dict[str, Any] = {
        "url": HOOK_URL,
        "auth_token": None,
        "filters": FilterRules(),
    }
    defaults.update(kwargs)
    return WebhookConfig(**defaults)


def make_text_message(**kwargs: Any) -> FakeMessage:
    return FakeMessage(**kwargs)


def make_group_image_message(**kwargs: Any) -> FakeMessage:
    """Captioned image sent to a two-member group."""
    defaults: dict[str, Any] = {
        "type": "image",
        "body": "look at this",
        "from_": "120363000000000000@g.us",
        "has_media": True,
        "media": FakeMedia(mimetype="image/jpeg", filename="photo.jpg"),
        "chat": FakeChat(
            participants=[
                FakeParticipant(id="15551234567@c.us", number="15551234567", name="Alice", is_admin=True),
                FakeParticipant(id="15557654321@c.us", number="15557654321"),
            ],
        ),
    }
    defaults.update(kwargs)
    return FakeMessage(**defaults)


def write_config_json(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


def recording_transport(
    requests: list[httpx.Request],
    status_code: int = 200,
) -> httpx.MockTransport:
    """MockTransport that records every request and answers ``status_code``."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code)

    return httpx.MockTransport(handler)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / ".wwebjs_auth" / "webhook.json"
