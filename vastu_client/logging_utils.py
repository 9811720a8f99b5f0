from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | int = "INFO") -> None:
    global _configured
    if _configured:
        logging.getLogger("vastu_client").setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("vastu_client")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    # requests/urllib3 log full URLs at DEBUG, keep them quiet
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    _configured = True


def mask_token(token: str | None) -> str:
    if not token:
        return "<none>"
    value = token.removeprefix("Bearer ").strip()
    if len(value) <= 16:
        return "***"
    return f"{value[:8]}...{value[-8:]}"
