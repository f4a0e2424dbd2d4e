"""Payload builder: turns a raw client message into a WebhookPayload.

Enrichment stages (media, quoted message, group roster) call back into the
messaging client. Each one is optional: a failing stage is logged and its
field is omitted or marked, the rest of the payload is still produced.
"""

from __future__ import annotations

import logging

from src.models import MessageType
from src.webhook.client import ChatContact, ChatMessage
from src.webhook.events import (
    ContactCardMessage,
    GroupInviteMessage,
    LocationMessage,
    MediaMessage,
    MessageVariant,
    ReactionMessage,
    TextMessage,
    classify,
)
from src.webhook.models import (
    MEDIA_DOWNLOAD_ERROR,
    GroupInfo,
    GroupParticipant,
    LocationInfo,
    MediaInfo,
    MentionInfo,
    MessageContent,
    QuotedMessageInfo,
    WebhookPayload,
)

logger = logging.getLogger(__name__)


def content_for(variant: MessageVariant) -> tuple[MessageType, MessageContent]:
    """Return the payload ``messageType`` and ``content`` for a variant."""
    if isinstance(variant, TextMessage):
        return MessageType.TEXT, MessageContent(text=variant.text)

    if isinstance(variant, MediaMessage):
        return variant.kind, _media_content(variant)

    if isinstance(variant, LocationMessage):
        return MessageType.LOCATION, MessageContent(
            location=LocationInfo(
                latitude=variant.latitude,
                longitude=variant.longitude,
                name=variant.name,
                address=variant.address,
            ),
        )

    if isinstance(variant, ContactCardMessage):
        return MessageType.CONTACT, MessageContent(contact=list(variant.vcards))

    if isinstance(variant, ReactionMessage):
        return MessageType.REACTION, MessageContent(
            reaction=variant.emoji,
            quoted_message_id=variant.quoted_message_id,
        )

    if isinstance(variant, GroupInviteMessage):
        return MessageType.GROUP_INVITE, MessageContent(
            invite_code=variant.invite_code,
            invite_expiration=variant.invite_expiration,
        )

    # UnknownMessage
    return MessageType.UNKNOWN, MessageContent(text=variant.text, has_media=variant.has_media)


def _media_content(variant: MediaMessage) -> MessageContent:
    kind = variant.kind
    content = MessageContent(has_media=True, media_type=kind.value)
    if kind in (MessageType.IMAGE, MessageType.VIDEO, MessageType.DOCUMENT):
        content.caption = variant.caption
    if kind in (MessageType.VIDEO, MessageType.AUDIO, MessageType.VOICE):
        content.duration = variant.duration
    if kind in (MessageType.AUDIO, MessageType.VOICE):
        content.is_voice_message = kind == MessageType.VOICE
    if kind == MessageType.DOCUMENT:
        content.filename = variant.filename or "unknown"
    return content


def mention_number(mention_id: str) -> str:
    """Phone number part of a serialized id such as ``15551234567@c.us``."""
    return mention_id.split("@", 1)[0]


class PayloadBuilder:
    """Builds the normalized payload for an accepted inbound message."""

    async def build(
        self,
        message: ChatMessage,
        contact: ChatContact,
        is_group: bool,
    ) -> WebhookPayload:
        message_type, content = content_for(classify(message))
        payload = WebhookPayload(
            sender=contact.number,
            name=contact.pushname,
            message=message.body or "",
            is_group=is_group,
            timestamp=message.timestamp,
            message_id=message.id,
            from_me=message.from_me,
            type=message.type,
            device_type=message.device_type,
            is_forwarded=message.is_forwarded,
            is_starred=message.is_starred,
            has_quoted_msg=message.has_quoted_msg,
            has_reaction=message.has_reaction,
            is_ephemeral=message.is_ephemeral,
            message_type=message_type,
            content=content,
        )

        if message.has_media:
            payload.media = await self._download_media(message)
        if message.has_quoted_msg:
            payload.quoted_message = await self._resolve_quoted(message)
        if is_group:
            payload.group = await self._resolve_group(message)
        if message.mentioned_ids:
            payload.mentions = [
                MentionInfo(id=mention_id, number=mention_number(mention_id))
                for mention_id in message.mentioned_ids
            ]
        return payload

    async def _download_media(self, message: ChatMessage) -> MediaInfo | None:
        try:
            media = await message.download_media()
        except Exception as e:
            logger.warning("Failed to download media for webhook (message %s): %s", message.id, e)
            return MediaInfo(error=MEDIA_DOWNLOAD_ERROR)
        if media is None:
            return None
        return MediaInfo(
            mimetype=media.mimetype,
            filename=media.filename,
            filesize=media.filesize,
            data=media.data,
        )

    async def _resolve_quoted(self, message: ChatMessage) -> QuotedMessageInfo | None:
        try:
            quoted = await message.get_quoted_message()
        except Exception as e:
            logger.warning("Failed to get quoted message for webhook (message %s): %s", message.id, e)
            return None
        return QuotedMessageInfo(
            message_id=quoted.id,
            body=quoted.body or "",
            type=quoted.type,
            from_me=quoted.from_me,
        )

    async def _resolve_group(self, message: ChatMessage) -> GroupInfo | None:
        try:
            chat = await message.get_chat()
        except Exception as e:
            logger.warning("Failed to get group information for webhook (message %s): %s", message.id, e)
            return None
        return GroupInfo(
            id=chat.id,
            name=chat.name,
            participants=[
                GroupParticipant(
                    id=p.id,
                    number=p.number,
                    name=p.name,
                    is_admin=p.is_admin,
                )
                for p in chat.participants or []
            ],
        )
