"""
Logging utilities for litweave.
"""

import logging
import sys
from typing import Optional

import structlog


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger bound to a standard library logger.

    Args:
        name: Logger name. If None, uses "litweave"

    Returns:
        A logger accepting keyword context (logger.info("msg", path=...))
    """
    return structlog.stdlib.get_logger(name or "litweave")


def configure_logging(
    log_level: str = "WARNING",
    json_output: bool = False,
    dev_mode: bool = True
) -> None:
    """
    Configure structlog on top of standard library logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_output: Whether to render events as JSON
        dev_mode: Whether to use dev-friendly console output
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    elif dev_mode:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.KeyValueRenderer(key_order=["event"])

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))

    root_logger = logging.getLogger()
    # Replace handlers from earlier calls instead of stacking them
    for old in [h for h in root_logger.handlers if getattr(h, "_litweave", False)]:
        root_logger.removeHandler(old)
    handler._litweave = True
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper()))
