"""Root logger configuration for applications embedding the fog engine."""

import logging
from typing import Any, Dict, Optional

from .structured_logger import get_logger, session_context
from .handlers import ConsoleHandler, FileHandler


def _level(name: Any) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)


def _reset_root(level: int) -> logging.Logger:
    """Set the root level and drop its handlers so setup can be repeated."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    return root


def setup_logging(config,
                  session_id: Optional[str] = None,
                  log_file: Optional[str] = None,
                  console: bool = True,
                  file: bool = True,
                  log_level: Optional[str] = None):
    """
    Configure the structured logging system.

    Args:
        config: Config instance (anything with a dot-notation ``get``)
        session_id: Session id to attach to every record of this context
        log_file: Log file path (defaults to ``logging.file``)
        console: Whether to log human-readable lines to stderr
        file: Whether to log JSON lines to a rotating file
        log_level: Minimum level (defaults to ``logging.level``)
    """
    log_level = str(log_level or config.get('logging.level', 'INFO')).upper()
    root = _reset_root(_level(log_level))

    if console:
        root.addHandler(ConsoleHandler(level=root.level))

    file_handler = None
    if file:
        file_handler = FileHandler.from_config(config, log_file)
        root.addHandler(file_handler)

    if session_id:
        session_context.set(session_id)

    get_logger(__name__).info(
        "Structured logging system initialized",
        extra={
            'context': {
                'log_level': log_level,
                'console': console,
                'log_file': file_handler.baseFilename if file_handler else None,
            }
        }
    )


def setup_simple_logging(log_level: str = 'INFO'):
    """Console-only logging for scripts and debugging."""
    root = _reset_root(_level(log_level))
    root.addHandler(ConsoleHandler(level=root.level))


def get_log_stats() -> Dict[str, Any]:
    """Describe the file handler installed on the root logger, if any."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, FileHandler):
            return {
                'file': {
                    'filename': handler.baseFilename,
                    'max_bytes': handler.maxBytes,
                    'backup_count': handler.backupCount,
                }
            }
    return {}
