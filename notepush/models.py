"""Core domain models used across layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class TextMessage:
    """Text message normalized from a webhook event."""

    text: str
    sender_id: str | None = None


@dataclass(frozen=True, slots=True)
class TimeParts:
    """Calendar and clock fields for one instant in the note time zone."""

    yyyy: str
    yy: str
    mm: str
    dd: str
    hh: str
    minute: str
    ss: str
    date: str


@dataclass(slots=True)
class RemoteDocument:
    """Document snapshot returned by the content store."""

    exists: bool
    sha: str | None = None
    content: str | None = None


@dataclass(slots=True)
class AppendResult:
    """Outcome of one append run."""

    ok: bool
    appended_count: int
    path: str
    error_detail: str | None = None

    def to_response(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "appended": self.appended_count, "path": self.path}
        return {
            "ok": False,
            "error": "append_failed",
            "detail": self.error_detail,
            "path": self.path,
        }
