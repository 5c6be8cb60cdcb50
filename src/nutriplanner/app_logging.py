"""Logging setup for the API process."""

import logging

# Supabase talks to PostgREST through httpx, which logs every request at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: int = logging.INFO) -> None:
    """Attach one stream handler to the ``nutriplanner`` logger.

    Calling it again only updates the level, so app factories and tests can
    call it freely.
    """
    logger = logging.getLogger("nutriplanner")
    logger.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
