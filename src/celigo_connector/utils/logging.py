"""Logging configuration and utilities."""

import functools
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional

import structlog
import colorlog
from structlog.typing import Processor


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """Set up logging configuration."""
    from ..config.settings import get_settings

    settings = get_settings()

    level = (log_level or settings.logging.level).upper()
    format_type = log_format or settings.logging.format
    file_path = log_file or settings.logging.file_path

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if file_path:
        setup_file_logging(file_path, level)

    setup_console_logging(level)


def setup_file_logging(file_path: str, level: str) -> None:
    """Set up file logging with rotation."""
    log_file = Path(file_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3
    )
    file_handler.setLevel(getattr(logging, level))
    file_handler.setFormatter(logging.Formatter(
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "message": "%(message)s"}'
    ))

    logging.getLogger().addHandler(file_handler)


def setup_console_logging(level: str) -> None:
    """Set up colored console logging on stderr."""
    root_logger = logging.getLogger()
    # Repeated setup (CLI subcommands, tests) must not stack handlers
    for handler in list(root_logger.handlers):
        if isinstance(handler, colorlog.StreamHandler):
            root_logger.removeHandler(handler)

    console_handler = colorlog.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level))
    console_handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        reset=True,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    ))

    root_logger.addHandler(console_handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_execution_time(func):
    """Decorator to log synchronous function execution time at debug level."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(
                "Function execution failed",
                function=func.__qualname__,
                execution_time=f"{time.perf_counter() - start_time:.4f}s",
                error=str(e)
            )
            raise

        logger.debug(
            "Function executed",
            function=func.__qualname__,
            execution_time=f"{time.perf_counter() - start_time:.4f}s"
        )
        return result

    return wrapper


def log_async_execution_time(func):
    """Decorator to log async function execution time."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.perf_counter()

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.error(
                "Async function execution failed",
                function=func.__qualname__,
                execution_time=f"{time.perf_counter() - start_time:.4f}s",
                error=str(e)
            )
            raise

        logger.info(
            "Async function executed",
            function=func.__qualname__,
            execution_time=f"{time.perf_counter() - start_time:.4f}s"
        )
        return result

    return wrapper
