"""
freshcart.api.__main__

Entrypoint for running the FastAPI application via `python -m freshcart.api`.

Responsibilities:
- Load settings.
- Create the app (a strict auth posture aborts here if the verifier cannot be built).
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from freshcart.api.app import create_app
from freshcart.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
