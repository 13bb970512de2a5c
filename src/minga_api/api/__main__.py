"""
minga_api.api.__main__

Entrypoint for running the API via `python -m minga_api.api` (or the `minga-api` script).
"""

from __future__ import annotations

import uvicorn

from minga_api.api.app import create_app
from minga_api.observability.logging import get_logger
from minga_api.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)
    log.info("serving", host=settings.api_host, port=settings.api_port, env=settings.env)

    # log_config=None leaves logging to structlog; the datastores close in the app lifespan.
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
