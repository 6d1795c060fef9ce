"""Structured logging with context propagation for map sessions."""

import logging
import sys
import time
import traceback
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

# Correlate records across the engine calls made for one map session
session_context: ContextVar[Optional[str]] = ContextVar('session_id', default=None)
region_context: ContextVar[Optional[str]] = ContextVar('region', default=None)
operation_context: ContextVar[Optional[str]] = ContextVar('operation', default=None)

# Keys of ``extra`` that StructuredLogger turns into record attributes itself
STRUCTURED_KEYS = ('context', 'performance', 'traceback')


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + 'Z'


def _format_exc_info(exc_info) -> Optional[str]:
    """Render any form of ``exc_info`` accepted by ``Logger._log``."""
    if isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
    elif not isinstance(exc_info, tuple):
        exc_info = sys.exc_info()
    if exc_info[0] is None:
        return None
    return ''.join(traceback.format_exception(*exc_info))


class StructuredLogger(logging.Logger):
    """
    Logger whose records carry ``context``, ``performance`` and ``traceback``.

    ``context`` always holds the current session id, region and operation
    (from the ContextVars above) plus any persistent fields added with
    ``add_context``. Callers may pass extra ``context``/``performance``
    dicts through ``extra``; formatters read the three attributes directly.
    """

    def __init__(self, name: str):
        super().__init__(name)
        self._context_fields: Dict[str, Any] = {}
        self._start_times: Dict[str, float] = {}

    def _current_context(self) -> Dict[str, Any]:
        context = {
            'session_id': session_context.get(),
            'region': region_context.get(),
            'operation': operation_context.get(),
            'logger_name': self.name,
            'timestamp': _utc_timestamp(),
            **self._context_fields
        }
        return {k: v for k, v in context.items() if v is not None}

    @staticmethod
    def _split_extra(extra) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Separate the structured keys from plain ``extra`` attributes."""
        plain = dict(extra) if isinstance(extra, dict) else {}
        structured = {key: plain.pop(key, None) for key in STRUCTURED_KEYS}
        return plain, structured

    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, **kwargs):
        plain, structured = self._split_extra(extra)

        context = self._current_context()
        context.update(structured['context'] or {})

        tb = structured['traceback']
        if not tb and exc_info:
            tb = _format_exc_info(exc_info)

        plain.update({
            'context': context,
            'performance': structured['performance'],
            'traceback': tb,
        })

        # The traceback travels in the record attribute, not in exc_info
        super()._log(level, msg, args, exc_info=False, extra=plain,
                     stack_info=stack_info, **kwargs)

    def add_context(self, **fields):
        """Attach fields to every later record of this logger.

        Example:
            logger.add_context(region='taiwan')
        """
        self._context_fields.update(fields)

    def remove_context(self, *keys):
        for key in keys:
            self._context_fields.pop(key, None)

    def clear_context(self):
        self._context_fields.clear()

    def start_operation(self, operation: str):
        """Start timing an operation."""
        self._start_times[operation] = time.perf_counter()
        self.debug(f"Started operation: {operation}")

    def end_operation(self, operation: str, **metrics):
        """Stop timing an operation and log its performance record."""
        started = self._start_times.pop(operation, None)
        if started is None:
            self.warning(f"No start time for operation: {operation}")
            return

        self.log_performance(operation, time.perf_counter() - started, **metrics)

    def log_performance(self, operation: str, duration: float,
                        level: int = logging.INFO, **metrics):
        """
        Log a performance record for an operation.

        Args:
            operation: Operation name
            duration: Duration in seconds
            level: Log level; per-viewport calls use DEBUG
            **metrics: Counters such as items_processed, cell_count, stride

        Example:
            logger.log_performance('enumerate_cells', 0.12, items_processed=155400)
        """
        performance = {
            'operation': operation,
            'duration_seconds': round(duration, 6),
            'timestamp': _utc_timestamp(),
            **metrics
        }
        if 'items_processed' in metrics and duration > 0:
            performance['items_per_second'] = round(metrics['items_processed'] / duration, 2)

        self.log(
            level,
            f"Performance: {operation} completed in {duration:.3f}s",
            extra={'performance': performance}
        )

    def log_error_with_context(self, error: Exception, operation: Optional[str] = None, **context):
        """Log an exception with its type, module and traceback."""
        error_context = {
            'error_type': type(error).__name__,
            'error_module': type(error).__module__,
            **context
        }
        if operation:
            error_context['operation'] = operation

        self.error(
            f"{type(error).__name__}: {error}",
            exc_info=error,
            extra={'context': error_context}
        )

    def create_child(self, suffix: str) -> 'StructuredLogger':
        return get_logger(f"{self.name}.{suffix}")


_logger_cache: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """
    Get or create a structured logger.

    Example:
        from fogmap.infrastructure.logging import get_logger
        logger = get_logger(__name__)
    """
    if name in _logger_cache:
        return _logger_cache[name]

    original_class = logging.getLoggerClass()
    logging.setLoggerClass(StructuredLogger)
    try:
        logger = logging.getLogger(name)
        _logger_cache[name] = logger
        return logger
    finally:
        logging.setLoggerClass(original_class)
