"""
badgermole.api.__main__

Entrypoint for running the service via `python -m badgermole.api`.

Responsibilities:
- Load settings.
- Create the app (web + SSH listeners share one event loop).
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from badgermole.api.app import create_app
from badgermole.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    # uvicorn handles SIGINT/SIGTERM and runs the shutdown hook (SSH + sweeper stop).
    uvicorn.run(
        app,
        host=settings.web_host,
        port=settings.web_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
