"""Command-line entry point: ``python -m taskapi``."""

import argparse
import sys

import uvicorn

from taskapi.config import LOG_LEVELS, Settings
from taskapi.main import create_app
from taskapi.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None, settings: Settings | None = None) -> Settings:
    """Overlay command-line flags on settings read from the environment."""
    settings = settings or Settings.from_env()
    parser = argparse.ArgumentParser(prog="taskapi", description="Run the Task API server.")
    parser.add_argument("--host", default=settings.host, help="interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="TCP port to listen on")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging verbosity",
    )
    args = parser.parse_args(argv)
    return Settings(host=args.host, port=args.port, log_level=args.log_level)


def main(argv: list[str] | None = None) -> int:
    try:
        settings = parse_args(argv)
        settings.validate()
    except ValueError as exc:
        logger.error("invalid configuration", extra={"extra_fields": {"error": str(exc)}})
        return 1

    configure_logging(settings.log_level)
    logger.info(
        "starting API server",
        extra={"extra_fields": {"host": settings.host, "port": settings.port}},
    )

    config = uvicorn.Config(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )
    try:
        uvicorn.Server(config).run()
    except SystemExit as exc:
        # uvicorn exits on its own when the listener cannot be bound.
        if exc.code:
            logger.error("server exited", extra={"extra_fields": {"code": exc.code}})
            return 1
        raise
    except OSError:
        logger.exception("server failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
