"""Run the number service under uvicorn.

Usage: ``python -m numsort`` (or the ``numsort`` console script). Address and
timeouts come from configuration; uvicorn handles SIGINT/SIGTERM and drains
in-flight requests for at most `http_server.timeout` seconds.
"""

from __future__ import annotations

import logging

import uvicorn

from numsort.config import load_config
from numsort.logging_setup import configure_logging
from numsort.main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    cfg = load_config()
    configure_logging(cfg.env)
    app = create_app(cfg)
    logger.info("Run: listening on %s", cfg.http_server.address)
    uvicorn.run(
        app,
        host=cfg.http_server.host,
        port=cfg.http_server.port,
        timeout_keep_alive=max(1, int(cfg.http_server.idle_timeout)),
        timeout_graceful_shutdown=max(1, int(cfg.http_server.timeout)),
        # Keep the dictConfig applied by configure_logging
        log_config=None,
    )
    logger.info("Run: server stopped")


if __name__ == "__main__":
    main()
