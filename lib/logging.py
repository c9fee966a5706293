"""
Logging module - handlers for the gateway's own loggers
"""
import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Module loggers are children of these (lib.db, api.routes.foods, api.access, ...)
GATEWAY_LOGGERS = ("api", "lib")


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to each gateway logger"""
    for name in GATEWAY_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level.upper())
        if logger.handlers:
            continue

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
