"""Append text messages to the daily note with optimistic-concurrency retry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol, Sequence

from notepush.github_store import StoreError
from notepush.models import AppendResult, RemoteDocument, TextMessage, TimeParts
from notepush.timeparts import DEFAULT_TIMEZONE, format_time_parts, resolve_note_path

LOGGER = logging.getLogger(__name__)


class DocumentStore(Protocol):
    async def fetch(self, path: str) -> RemoteDocument: ...

    async def write(self, path: str, content: str, sha: str | None = None, message: str = ...) -> object: ...


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounded attempts with a linear backoff between them."""

    max_attempts: int = 3
    backoff_seconds: float = 0.15

    def delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""

        return self.backoff_seconds * attempt


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def render_block(messages: Sequence[TextMessage], parts: TimeParts) -> str:
    """Render messages as ``- HH:MM text`` lines ending with a newline."""

    time = f"{parts.hh}:{parts.minute}"
    lines = [f"- {time} {_normalize_newlines(message.text)}" for message in messages]
    return "\n".join(lines) + "\n"


def merge_content(current: RemoteDocument, block: str, parts: TimeParts) -> str:
    """Build the next file body from the current snapshot and a new block."""

    if not current.exists:
        return f"# {parts.date}\n\n{block}"
    existing = (current.content or "").rstrip("\n")
    return f"{existing}\n{block}"


class NoteAppender:
    """Read-modify-write of the daily note, retried on sha conflicts."""

    def __init__(
        self,
        store: DocumentStore,
        path_template: str,
        tz_name: str = DEFAULT_TIMEZONE,
        clock: Callable[[], datetime] = _utc_now,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._path_template = path_template
        self._tz_name = tz_name
        self._clock = clock
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    async def append(self, messages: Sequence[TextMessage]) -> AppendResult:
        """Append ``messages`` to today's note and report the outcome.

        Store failures never propagate; they come back as ``ok=False`` with the
        last error as detail.
        """

        parts = format_time_parts(self._clock(), self._tz_name)
        path = resolve_note_path(self._path_template, parts)
        if not messages:
            return AppendResult(ok=True, appended_count=0, path=path)

        block = render_block(messages, parts)
        commit_message = f"note: append from LINE ({parts.date})"
        max_attempts = self._retry_policy.max_attempts

        last_error: StoreError | None = None
        for attempt in range(1, max_attempts + 1):
            try:
                current = await self._store.fetch(path)
                await self._store.write(
                    path,
                    merge_content(current, block, parts),
                    sha=current.sha if current.exists else None,
                    message=commit_message,
                )
            except StoreError as exc:
                last_error = exc
                if not exc.is_conflict or attempt == max_attempts:
                    break
                wait = self._retry_policy.delay(attempt)
                LOGGER.warning(
                    "Conflict writing %s, retrying in %.2fs (attempt %d/%d)",
                    path,
                    wait,
                    attempt,
                    max_attempts,
                )
                await self._sleep(wait)
                continue

            LOGGER.info("Appended %d message(s) to %s", len(messages), path)
            return AppendResult(ok=True, appended_count=len(messages), path=path)

        LOGGER.error("Failed to append note to %s: %s", path, last_error)
        return AppendResult(
            ok=False,
            appended_count=0,
            path=path,
            error_detail=str(last_error),
        )
