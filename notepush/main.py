"""Application entrypoint."""

from __future__ import annotations

import logging

import uvicorn

from notepush.config import load_settings
from notepush.server import create_app

LOGGER = logging.getLogger(__name__)


def main() -> None:
    """Validate settings, configure logging and serve the webhook."""

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    app = create_app(settings)
    LOGGER.info(
        "Serving note-push for %s/%s@%s on %s:%d",
        settings.github_owner,
        settings.github_repo,
        settings.github_branch,
        settings.host,
        settings.port,
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
