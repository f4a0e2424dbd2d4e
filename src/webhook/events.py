"""Classification of raw client messages into a closed set of variants.

Every inbound message is turned into exactly one of the dataclasses below
before any payload is built, so each variant's fields are explicit.
Raw kinds the client may report under several names are folded together:

- ``chat`` / ``text`` -> text
- ``ptt`` / ``voice`` -> voice
- ``vcard`` / ``multi_vcard`` / ``contact`` -> contact
- ``groups_v4_invite`` / ``group_invite`` -> group invite
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.models import MessageType
from src.webhook.client import ChatMessage

_TEXT_KINDS = frozenset({"chat", "text"})
_MEDIA_KINDS: dict[str, MessageType] = {
    "image": MessageType.IMAGE,
    "video": MessageType.VIDEO,
    "audio": MessageType.AUDIO,
    "ptt": MessageType.VOICE,
    "voice": MessageType.VOICE,
    "document": MessageType.DOCUMENT,
    "sticker": MessageType.STICKER,
}
_CONTACT_KINDS = frozenset({"vcard", "multi_vcard", "contact"})
_INVITE_KINDS = frozenset({"groups_v4_invite", "group_invite"})


@dataclass(frozen=True)
class TextMessage:
    text: str


@dataclass(frozen=True)
class MediaMessage:
    kind: MessageType
    caption: str = ""
    duration: int = 0
    filename: str | None = None


@dataclass(frozen=True)
class LocationMessage:
    latitude: float | None
    longitude: float | None
    name: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class ContactCardMessage:
    vcards: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReactionMessage:
    emoji: str
    quoted_message_id: str | None = None


@dataclass(frozen=True)
class GroupInviteMessage:
    invite_code: str | None
    invite_expiration: int | None = None


@dataclass(frozen=True)
class UnknownMessage:
    text: str
    has_media: bool


MessageVariant = (
    TextMessage
    | MediaMessage
    | LocationMessage
    | ContactCardMessage
    | ReactionMessage
    | GroupInviteMessage
    | UnknownMessage
)


def classify(message: ChatMessage) -> MessageVariant:
    """Map a raw client message onto its variant. Never raises for odd kinds."""
    kind = message.type
    body = message.body or ""

    if kind in _TEXT_KINDS:
        return TextMessage(text=body)

    if kind in _MEDIA_KINDS:
        return MediaMessage(
            kind=_MEDIA_KINDS[kind],
            caption=body,
            duration=message.duration or 0,
            filename=message.filename,
        )

    if kind == "location":
        loc = message.location
        if loc is None:
            return LocationMessage(latitude=None, longitude=None)
        return LocationMessage(
            latitude=loc.latitude,
            longitude=loc.longitude,
            name=loc.name,
            address=loc.address,
        )

    if kind in _CONTACT_KINDS:
        return ContactCardMessage(vcards=list(message.vcards or []))

    if kind == "reaction":
        return ReactionMessage(emoji=body, quoted_message_id=message.quoted_msg_id)

    if kind in _INVITE_KINDS:
        invite = message.invite_v4
        if invite is None:
            return GroupInviteMessage(invite_code=None)
        return GroupInviteMessage(
            invite_code=invite.invite_code,
            invite_expiration=invite.invite_expiration,
        )

    return UnknownMessage(text=body, has_media=bool(message.has_media))
