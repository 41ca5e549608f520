"""Logging configuration for the gred command."""

import logging
from logging.handlers import RotatingFileHandler

from gred.gred_settings import GredSettings


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(settings: GredSettings) -> None:
    """
    Configure logging for a gred run.

    Match output goes to stdout and diagnostics to stderr, so log records are
    only ever written to the file named by GRED_LOG.  Without one, records are
    discarded.

    Args:
        settings: Settings read from the environment
    """
    root = logging.getLogger()
    if not settings.log_file:
        root.addHandler(logging.NullHandler())
        return

    # Keep up to 5 rotated files, max 1MB each
    handler = RotatingFileHandler(
        settings.log_file,
        maxBytes=1024*1024,
        backupCount=5,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True
    )
