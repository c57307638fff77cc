from __future__ import annotations

import argparse
import logging
import os

import uvicorn

from .config import require_settings
from .main import create_app

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("debug", "info", "warning", "error")

log = logging.getLogger("maytapi_relay.cli")


def default_log_level() -> str:
    # Unknown LOG_LEVEL values fall back to info
    level = os.getenv("LOG_LEVEL", "info").lower()
    return level if level in LOG_LEVELS else "info"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Relay send-message requests to Maytapi.")
    parser.add_argument("--host", type=str, default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=default_log_level(),
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """
    Start the relay server.

    Credentials are checked before anything else; a missing value ends the
    process with status 1 and no socket is ever bound.
    """
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    settings = require_settings()
    host = args.host if args.host is not None else settings.host
    port = args.port if args.port is not None else settings.port

    app = create_app(settings)

    log.info("--- Server Started ---")
    log.info("Server running at http://localhost:%s", port)
    log.info("Maytapi Instance ID: %s", settings.maytapi_instance_id)

    uvicorn.run(app, host=host, port=port, log_level=args.log_level)


if __name__ == "__main__":
    main()
