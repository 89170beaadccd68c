import logging
import sys


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, transport_level: int = logging.WARNING) -> None:
    """
    Route library logs to STDOUT. Each pipeline class logs through
    logging.getLogger(<class name>), so a single root handler is enough
    to surface dispatch and captured-failure events. aiohttp's own loggers
    are held at `transport_level` so they do not flood the output.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    set_transport_logging_level(transport_level)


def set_transport_logging_level(level: int = logging.WARNING) -> None:
    """Set the level of the aiohttp client and access loggers"""
    logging.getLogger("aiohttp").setLevel(level)
