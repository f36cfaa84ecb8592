"""Centralized logging config for the portfolio API. Logs go to stderr and, optionally, a file."""
import logging
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s: %(message)s"
DATE_FMT = "%Y-%m-%dT%H:%M:%S"

LOGGER_NAME = "portfolio"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FMT)
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        logger.addHandler(stream)
        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
    # we log requests ourselves
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return logger
