"""
Structured logging setup for the Bank Reserves application.

structlog renders every event into a single line, either key=value or
JSON, which stdlib handlers then write to the console and optionally a
rotating log file.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional
import structlog
from structlog.typing import FilteringBoundLogger

from ..config.settings import Settings, get_settings

NOISY_LOGGERS = ('aiohttp', 'urllib3', 'asyncio', 'watchdog', 'streamlit')


class PerformanceMetricsProcessor:
    """Processor for performance metrics logging."""

    @staticmethod
    def add_performance_context(logger: FilteringBoundLogger, name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Tag timed events as PERFORMANCE logs."""
        if 'execution_time' in event_dict:
            event_dict['log_type'] = 'PERFORMANCE'
            event_dict['execution_time'] = round(float(event_dict['execution_time']), 4)
        elif 'log_type' not in event_dict:
            event_dict['log_type'] = 'SYSTEM'

        return event_dict


def build_processors(settings: Settings) -> list:
    """Build the structlog processor chain for the configured format."""
    processors = [
        structlog.contextvars.merge_contextvars,
        PerformanceMetricsProcessor.add_performance_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == 'json':
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.processors.KeyValueRenderer(key_order=['timestamp', 'level', 'event']))

    return processors


def configure_structlog(settings: Settings) -> None:
    """Configure structlog for structured logging."""
    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_file_logging(settings: Settings) -> Optional[logging.Handler]:
    """Set up file logging with rotation."""
    if not settings.enable_file_logging:
        return None

    log_path = Path(settings.log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter('%(message)s'))

    return file_handler


def setup_console_logging(settings: Settings) -> Optional[logging.Handler]:
    """Set up console logging."""
    if not settings.enable_console_logging:
        return None

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    return console_handler


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Set up logging for the application.

    Replaces any handlers already attached to the root logger, so calling
    it again (as Streamlit does on every rerun) is harmless.

    Args:
        settings: Application settings instance
    """
    if settings is None:
        settings = get_settings()

    configure_structlog(settings)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, settings.log_level.upper())
    root_logger.setLevel(log_level)

    handlers = [setup_console_logging(settings)]

    try:
        handlers.append(setup_file_logging(settings))
    except OSError as e:
        logging.error(f"Failed to setup file logging: {e}")

    for handler in handlers:
        if handler is not None:
            handler.setLevel(log_level)
            root_logger.addHandler(handler)

    # Configure third-party loggers to reduce noise
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging configured",
        environment=settings.environment,
        fdic_api_key_configured=settings.has_fdic_api_key(),
        level=settings.log_level,
        format=settings.log_format,
        file_path=settings.log_file_path if settings.enable_file_logging else None,
        handlers=len([h for h in handlers if h is not None])
    )
