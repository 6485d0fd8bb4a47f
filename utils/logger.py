"""
Logger Configuration
Logging for the retriever package and its CLI
"""
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Union

from rich.logging import RichHandler
from rich.console import Console


# stderr so JSON printed on stdout stays clean
console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_FORMAT_SIMPLE = "%(message)s"

LOG_DIR = Path(__file__).parent.parent / "logs"

# Every module logs under this name via logging.getLogger(__name__) or a child of it.
RETRIEVER_LOGGER = "retriever"

# httpx/httpcore log every request at INFO; only shown with --debug.
HTTP_LOGGERS = ("httpx", "httpcore")


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _build_handlers(level: int, log_file: Optional[str], use_rich: bool):
    if use_rich:
        console_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler.setLevel(level)
    yield console_handler
    
    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_DIR / log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(level)
        yield file_handler


def setup_logger(
    name: str = RETRIEVER_LOGGER,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    use_rich: bool = True,
    debug: bool = False,
    quiet_loggers: Iterable[str] = HTTP_LOGGERS,
) -> logging.Logger:
    """
    Configure the retriever logger.
    
    Calling it again replaces the handlers, so the CLI can switch level or
    output without duplicating log lines.
    
    Args:
        name: logger name; children (``retriever.hydrator`` ...) inherit it
        level: level as int or name ("DEBUG", "INFO", ...)
        log_file: file name under ``logs/`` (optional)
        use_rich: pretty console output via Rich
        debug: force DEBUG and let the HTTP client loggers through
        quiet_loggers: third-party loggers held at WARNING unless ``debug``
        
    Returns:
        the configured Logger
    """
    level = logging.DEBUG if debug else _resolve_level(level)
    
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(level, log_file, use_rich):
        logger.addHandler(handler)
    
    for quiet in quiet_loggers:
        logging.getLogger(quiet).setLevel(logging.DEBUG if debug else logging.WARNING)
    
    return logger
