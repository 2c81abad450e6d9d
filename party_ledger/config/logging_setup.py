"""Process-wide logging setup shared by the API and CLI entrypoints."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO.
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "httpx",
    "httpcore",
    "uvicorn.access",
    "asyncio",
)


def config_configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root logger with one console handler.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Logging level name such as `INFO` or `DEBUG`.

    Returns:
        logging.Logger: Configured root logger.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    resolved_level = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved_level, int):
        raise ValueError(f"unsupported logging level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_party_ledger_handler", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    console_handler._party_ledger_handler = True  # pylint: disable=protected-access
    root_logger.addHandler(console_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return root_logger
