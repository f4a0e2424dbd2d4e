"""Filter predicate applied before any payload is built."""

from __future__ import annotations

from src.models import FilterRules

_GROUP_DOMAIN = "@g.us"


def is_group_chat(chat_id: str) -> bool:
    return _GROUP_DOMAIN in chat_id


def accepts(rules: FilterRules, is_group: bool, sender_number: str) -> bool:
    """Return True if an event from ``sender_number`` should be forwarded."""
    if is_group and not rules.allow_groups:
        return False
    if not is_group and not rules.allow_private:
        return False
    if rules.allowed_numbers and sender_number not in rules.allowed_numbers:
        return False
    return True
