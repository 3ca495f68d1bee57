"""Logging configuration for the session scraper."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)-8s | %(message)s"

# Page bodies go to stdout, so the console log defaults to stderr
STREAM_NAMES = ("stderr", "stdout")

# Connection pool chatter from the transport
TRANSPORT_LOGGER = "urllib3"


def _resolve_stream(stream: Union[str, TextIO, None]) -> TextIO:
    if stream is None:
        return sys.stderr
    if isinstance(stream, str):
        if stream.lower() not in STREAM_NAMES:
            raise ValueError(
                f"Unknown log stream {stream!r}, expected one of {STREAM_NAMES}"
            )
        return getattr(sys, stream.lower())
    return stream


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    name: str = "session_scraper",
    stream: Union[str, TextIO, None] = None,
    console_format: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for the scraper.

    Calling it again replaces the handlers instead of adding more. The
    transport's own logger follows the scraper's level at DEBUG and is
    held at WARNING otherwise, so connection details show up only when
    debugging a session.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to log file
        name: Logger name
        stream: "stderr", "stdout" or an open text stream for the console
        console_format: Format string for console records

    Returns:
        Configured logger instance

    Raises:
        ValueError: If ``stream`` names an unknown stream
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(_resolve_stream(stream))
    console_handler.setFormatter(
        logging.Formatter(console_format or CONSOLE_FORMAT, datefmt="%H:%M:%S")
    )
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    logging.getLogger(TRANSPORT_LOGGER).setLevel(
        logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    )

    return logger


def get_logger(name: str = "session_scraper") -> logging.Logger:
    """Get an existing logger by name."""
    return logging.getLogger(name)
