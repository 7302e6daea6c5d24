from __future__ import annotations

import pytest

from notepush.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        LINE_CHANNEL_SECRET="channel-secret",
        GITHUB_TOKEN="gh-token",
        GITHUB_OWNER="octo",
        GITHUB_REPO="notes",
        GITHUB_BRANCH="main",
        GITHUB_API_BASE_URL="https://api.github.com",
        GITHUB_API_VERSION="2022-11-28",
        NOTE_FILE_PATH_TEMPLATE="daily/{date}.md",
        NOTE_TIMEZONE="Asia/Tokyo",
        APPEND_MAX_ATTEMPTS=3,
        APPEND_BACKOFF_SECONDS=0.15,
        REQUEST_TIMEOUT_SECONDS=5.0,
        LOG_LEVEL="INFO",
        _env_file=None,
    )
