"""Boundary of the external messaging client.

The relay never talks to a concrete client library. Anything exposing
these attributes and coroutines can be fed into the pipeline.
"""

from __future__ import annotations

from typing import Protocol


class ChatContact(Protocol):
    number: str
    pushname: str | None


class ChatParticipant(Protocol):
    id: str  # serialized, e.g. "15551234567@c.us"
    number: str
    name: str | None
    is_admin: bool


class GroupChat(Protocol):
    id: str
    name: str
    participants: list[ChatParticipant]


class DownloadedMedia(Protocol):
    mimetype: str
    data: str  # base64
    filename: str | None
    filesize: int | None


class MessageLocation(Protocol):
    latitude: float
    longitude: float
    name: str | None
    address: str | None


class GroupInvite(Protocol):
    invite_code: str
    invite_expiration: int | None


class ChatMessage(Protocol):
    """Inbound message as delivered by the messaging client."""

    id: str
    body: str
    type: str
    timestamp: int
    from_: str
    from_me: bool
    device_type: str | None
    is_forwarded: bool
    is_starred: bool
    has_quoted_msg: bool
    has_reaction: bool
    is_ephemeral: bool
    has_media: bool
    duration: int | None
    filename: str | None
    location: MessageLocation | None
    vcards: list[str]
    quoted_msg_id: str | None
    invite_v4: GroupInvite | None
    mentioned_ids: list[str]

    async def get_contact(self) -> ChatContact: ...

    async def download_media(self) -> DownloadedMedia | None: ...

    async def get_quoted_message(self) -> ChatMessage: ...

    async def get_chat(self) -> GroupChat: ...
