import logging
import sys
from datetime import datetime

import structlog

from safe_find.config import config

# Flag to ensure configuration happens only once
_is_configured = False


def setup_logging():
    """
    Set up logging configuration for applications using safe_find.
    This function is idempotent and will only configure the logging system once.
    The library itself never calls it.
    """
    global _is_configured
    if _is_configured:
        return

    log_level = config.logging.log_level.upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s')

    handlers = []

    # Console Handler
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    # File Handler (if configured)
    if config.logging.log_file_path:
        log_path = config.logging.log_file_path
        log_path.parent.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        new_log_file = log_path.parent / f"{log_path.stem}_{timestamp}{log_path.suffix}"

        file_handler = logging.FileHandler(new_log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Replaces handlers installed by other libraries or pytest
    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=False, key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _is_configured = True


def get_structured_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger with the given name.

    Events are routed through the stdlib logger of the same name, so they stay
    silent until the application enables that logger (setup_logging or its own
    logging configuration).

    Args:
        name: The name of the logger (usually __name__ of the module)

    Returns:
        A structured logger instance with context binding capabilities

    Example:
        >>> logger = get_structured_logger(__name__)
        >>> logger.debug("element_lookup_absent", locator="#banana", attempts=12)
    """
    return structlog.wrap_logger(logging.getLogger(name))


def bind_context(logger: structlog.BoundLogger, **context) -> structlog.BoundLogger:
    """
    Bind context data to a logger for all subsequent log entries.

    Args:
        logger: The structured logger to bind context to
        **context: Keyword arguments to bind as context

    Returns:
        A new logger with the bound context
    """
    return logger.bind(**context)
