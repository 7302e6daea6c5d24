"""FastAPI webhook endpoint for LINE deliveries."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from notepush.appender import DocumentStore, NoteAppender, RetryPolicy
from notepush.config import Settings
from notepush.events import extract_text_messages
from notepush.github_store import GitHubContentStore
from notepush.signature import SIGNATURE_HEADER, verify_signature

LOGGER = logging.getLogger(__name__)

ROUTE = "/api/note-push"


def create_app(
    settings: Settings,
    store: DocumentStore | None = None,
    clock: Callable[[], datetime] | None = None,
    sleep: Callable[[float], Awaitable[object]] | None = None,
) -> FastAPI:
    """Build the webhook app around an already validated settings object."""

    appender_kwargs: dict[str, Any] = {
        "retry_policy": RetryPolicy(
            max_attempts=settings.append_max_attempts,
            backoff_seconds=settings.append_backoff_seconds,
        ),
    }
    if clock is not None:
        appender_kwargs["clock"] = clock
    if sleep is not None:
        appender_kwargs["sleep"] = sleep
    appender = NoteAppender(
        store=store or GitHubContentStore(settings),
        path_template=settings.note_file_path_template,
        tz_name=settings.note_timezone,
        **appender_kwargs,
    )

    app = FastAPI(title="note-push")

    @app.get(ROUTE)
    async def health() -> dict[str, Any]:
        return {"ok": True, "name": "note-push"}

    @app.post(ROUTE)
    async def receive(request: Request) -> JSONResponse:
        # The signature covers the exact bytes received, so check before parsing.
        raw_body = await request.body()
        signature = request.headers.get(SIGNATURE_HEADER)
        if not verify_signature(raw_body, signature, settings.line_channel_secret):
            LOGGER.warning("Invalid LINE signature")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"ok": False, "error": "Invalid signature"},
            )

        try:
            payload = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"ok": False, "error": "Invalid JSON"},
            )

        messages = extract_text_messages(payload)
        if not messages:
            return JSONResponse(content={"ok": True, "appended": 0})

        # LINE redelivers on non-2xx, so store failures are reported in the body.
        result = await appender.append(messages)
        return JSONResponse(content=result.to_response())

    return app
