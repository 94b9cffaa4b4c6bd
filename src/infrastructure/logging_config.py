"""Logging setup shared by the CLI, FastAPI and AgentCore entry points."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    # httpx logs every request URL at INFO, which includes the Polygon apiKey.
    logging.getLogger("httpx").setLevel(logging.WARNING)
