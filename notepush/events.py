"""Webhook payload parsing."""

from __future__ import annotations

from typing import Any

from notepush.models import TextMessage


def extract_text_messages(payload: Any) -> list[TextMessage]:
    """Return non-blank text messages from a LINE webhook payload, in event order."""

    if not isinstance(payload, dict):
        return []
    events = payload.get("events")
    if not isinstance(events, list):
        return []

    messages: list[TextMessage] = []
    for event in events:
        message = _to_text_message(event)
        if message is not None:
            messages.append(message)
    return messages


def _to_text_message(event: Any) -> TextMessage | None:
    if not isinstance(event, dict) or event.get("type") != "message":
        return None
    message = event.get("message")
    if not isinstance(message, dict) or message.get("type") != "text":
        return None

    raw_text = message.get("text")
    text = "" if raw_text is None else str(raw_text)
    if not text.strip():
        return None

    source = event.get("source")
    user_id = source.get("userId") if isinstance(source, dict) else None
    return TextMessage(text=text, sender_id=str(user_id) if user_id else None)
