"""Logging helpers."""

import logging
import os


def create_file_log_handler(log_file: str, mode: str = "a") -> logging.FileHandler:
    """Create a file-based logging handler.

    The parent directory of ``log_file`` is created if it does not exist.
    """
    directory = os.path.dirname(log_file)
    if directory:
        os.makedirs(directory, exist_ok=True)

    log_handler = logging.FileHandler(log_file, mode)
    log_handler.setLevel(logging.INFO)

    log_handler.setFormatter(
        logging.Formatter(
            "[{%(asctime)s} %(levelname)-7s %(filename)10s : %(lineno)-4s] %(funcName)20s %(message)s",
            # Log timestamp format (ISO 8601)
            "%Y-%m-%dT%H:%M:%S%z",
        )
    )

    return log_handler


def reset_handlers(logger: logging.Logger) -> None:
    """Remove and close every handler attached to a logger."""
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()
