import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from pagediff.config import LOG_FILE, LOG_LEVEL


class PageDiffFormatter(logging.Formatter):
    """
    Single-line log format shared by every pagediff logger:
    [ Tue Jan 06 05:32:41 AM UTC 2026 ] : INFO : pagediff : Message
    """
    def format(self, record):
        dt = datetime.fromtimestamp(record.created, timezone.utc)
        timestamp = dt.strftime("%a %b %d %I:%M:%S %p UTC %Y")

        # Context defaults to the logger name; callers may pass extra={"context": ...}
        context = getattr(record, "context", record.name)

        return f"[ {timestamp} ] : {record.levelname} : {context} : {record.getMessage()}"


def setup_logger(name="pagediff", log_file=None, level=logging.INFO):
    """Sets up a logger with the standard format."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers if setup_logger is called multiple times
    if logger.handlers:
        return logger

    # Child loggers propagate to the root 'pagediff' logger
    if name != "pagediff":
        logger.propagate = True
        setup_logger("pagediff", log_file=log_file, level=level)
        return logger

    formatter = PageDiffFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Only the root 'pagediff' logger gets a FileHandler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_level(level):
    """Change the level of the root 'pagediff' logger after setup."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)


def add_file_handler(log_file):
    """Attach a FileHandler to the already configured root 'pagediff' logger."""
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == str(Path(log_file).resolve()):
            return handler
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(PageDiffFormatter())
    logger.addHandler(file_handler)
    return file_handler


# Global logger instance
logger = setup_logger(log_file=LOG_FILE, level=getattr(logging, LOG_LEVEL, logging.INFO))
