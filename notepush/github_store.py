"""GitHub Contents API client used as the note store."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any
from urllib.parse import quote

import httpx

from notepush.config import Settings
from notepush.models import RemoteDocument

LOGGER = logging.getLogger(__name__)

CONFLICT_STATUSES = frozenset({409, 412})


class StoreError(RuntimeError):
    """A failed store call, carrying the HTTP status (None for transport errors)."""

    def __init__(
        self,
        operation: str,
        status_code: int | None,
        body: str,
        conflict: bool | None = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.body = body
        self._conflict = conflict
        if status_code is None:
            super().__init__(f"GitHub {operation} failed: {body}")
        else:
            super().__init__(f"GitHub {operation} failed ({status_code}): {body}")

    @property
    def is_conflict(self) -> bool:
        if self._conflict is not None:
            return self._conflict
        return self.status_code in CONFLICT_STATUSES


class GitHubContentStore:
    """Read and write single files in one repository branch."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def _contents_url(self, path: str) -> str:
        owner = quote(self._settings.github_owner, safe="")
        repo = quote(self._settings.github_repo, safe="")
        return f"/repos/{owner}/{repo}/contents/{quote(path.lstrip('/'), safe='/')}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.github_token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self._settings.github_api_version,
        }

    def _client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(self._settings.request_timeout_seconds)
        return httpx.AsyncClient(base_url=self._settings.github_api_base_url, timeout=timeout)

    async def fetch(self, path: str) -> RemoteDocument:
        """Return the current file, or ``exists=False`` when GitHub answers 404."""

        try:
            async with self._client() as client:
                response = await client.get(
                    self._contents_url(path),
                    headers=self._headers(),
                    params={"ref": self._settings.github_branch},
                )
        except httpx.HTTPError as exc:
            raise StoreError("GET", None, str(exc) or type(exc).__name__) from exc

        if response.status_code == 404:
            return RemoteDocument(exists=False)
        if not response.is_success:
            raise StoreError("GET", response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise StoreError("GET", response.status_code, "response is not JSON") from exc
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            raise StoreError("GET", response.status_code, f"{path} is not a file")
        # Files over 1 MB come back with encoding "none" and empty content.
        if data.get("encoding") != "base64":
            raise StoreError(
                "GET", response.status_code, f"unsupported content encoding {data.get('encoding')!r} for {path}"
            )
        try:
            content = base64.b64decode(data.get("content") or "").decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise StoreError("GET", response.status_code, f"{path} is not UTF-8 text: {exc}") from exc
        return RemoteDocument(exists=True, sha=data.get("sha"), content=content)

    async def write(
        self,
        path: str,
        content: str,
        sha: str | None = None,
        message: str = "note: append",
    ) -> None:
        """Create the file (no ``sha``) or update it against ``sha``.

        A 422 on create means another writer created the file first, so it is
        reported as a conflict.
        """

        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self._settings.github_branch,
        }
        if sha:
            payload["sha"] = sha

        try:
            async with self._client() as client:
                response = await client.put(
                    self._contents_url(path),
                    headers=self._headers(),
                    json=payload,
                )
        except httpx.HTTPError as exc:
            raise StoreError("PUT", None, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            conflict = True if not sha and response.status_code == 422 else None
            raise StoreError("PUT", response.status_code, response.text, conflict=conflict)
        LOGGER.debug("GitHub PUT %s -> %s", path, response.status_code)
