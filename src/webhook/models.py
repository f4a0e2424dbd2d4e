"""Data models for the webhook delivery pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models import MessageType

MEDIA_DOWNLOAD_ERROR = "Failed to download media"


class _PayloadModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocationInfo(_PayloadModel):
    latitude: float | None = None
    longitude: float | None = None
    name: str | None = None
    address: str | None = None


class MessageContent(_PayloadModel):
    """Kind-specific body of a payload. Unset fields are not serialized."""

    text: str | None = None
    caption: str | None = None
    has_media: bool | None = None
    media_type: str | None = None
    duration: int | None = None
    is_voice_message: bool | None = None
    filename: str | None = None
    location: LocationInfo | None = None
    contact: list[str] | None = None
    reaction: str | None = None
    quoted_message_id: str | None = None
    invite_code: str | None = None
    invite_expiration: int | None = None


class MediaInfo(_PayloadModel):
    mimetype: str | None = None
    filename: str | None = None
    filesize: int | None = None
    data: str | None = None  # base64
    error: str | None = None


class QuotedMessageInfo(_PayloadModel):
    message_id: str
    body: str
    type: str
    from_me: bool


class GroupParticipant(_PayloadModel):
    id: str
    number: str
    name: str | None = None
    is_admin: bool = False


class GroupInfo(_PayloadModel):
    id: str
    name: str
    participants: list[GroupParticipant] = Field(default_factory=list)


class MentionInfo(_PayloadModel):
    id: str
    number: str


class WebhookPayload(_PayloadModel):
    """Normalized representation of one inbound chat event."""

    sender: str = Field(alias="from")
    name: str | None = None
    message: str = ""
    is_group: bool
    timestamp: int
    message_id: str
    from_me: bool = False
    type: str
    device_type: str | None = None
    is_forwarded: bool = False
    is_starred: bool = False
    has_quoted_msg: bool = False
    has_reaction: bool = False
    is_ephemeral: bool = False
    message_type: MessageType
    content: MessageContent
    media: MediaInfo | None = None
    quoted_message: QuotedMessageInfo | None = None
    group: GroupInfo | None = None
    mentions: list[MentionInfo] | None = None

    def to_json_dict(self) -> dict[str, Any]:
        """Wire body: camelCase keys, unset optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class DeliveryResult:
    """Outcome of one POST to the webhook URL."""

    ok: bool
    status_code: int | None
    description: str
