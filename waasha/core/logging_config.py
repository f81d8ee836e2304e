import logging
import sys

from waasha.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """
    Sends every log record to stdout with the configured format and level.
    Safe to call more than once: existing root handlers are replaced.
    """
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    numeric_level = getattr(logging, settings.LOG_LEVEL.upper(), None)
    invalid_level = not isinstance(numeric_level, int)
    if invalid_level:
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    root_logger.addHandler(console_handler)

    if invalid_level:
        logger.warning("Invalid log level '%s'. Defaulting to INFO.", settings.LOG_LEVEL)

    # noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    logger.debug("Logging configured at level %s", logging.getLevelName(numeric_level))
