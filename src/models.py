"""Shared Pydantic data models for chat-webhook-relay."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums ---


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    VOICE = "voice"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    CONTACT = "contact"
    REACTION = "reaction"
    GROUP_INVITE = "group_invite"
    UNKNOWN = "unknown"


# --- Webhook Configuration Models ---


class FilterRules(BaseModel):
    """Which inbound events are forwarded to the webhook."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Empty means no sender restriction
    allowed_numbers: list[str] = Field(default_factory=list, alias="allowedNumbers")
    allow_private: bool = Field(default=True, alias="allowPrivate")
    allow_groups: bool = Field(default=True, alias="allowGroups")

    @field_validator("allowed_numbers")
    @classmethod
    def _dedupe_numbers(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class WebhookConfig(BaseModel):
    """The single active webhook destination and its filters.

    ``url`` is deliberately not validated here; a malformed URL surfaces
    as a failed delivery.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    auth_token: str | None = Field(default=None, alias="authToken")
    filters: FilterRules = Field(default_factory=FilterRules)

    def to_file_dict(self) -> dict[str, Any]:
        """Backing-file representation: camelCase keys, no null token."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_display_dict(self) -> dict[str, Any]:
        data = self.to_file_dict()
        if self.auth_token:
            data["authToken"] = "***"
        return data
