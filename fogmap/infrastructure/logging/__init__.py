"""Structured logging infrastructure for the fog grid engine."""

from .structured_logger import (
    StructuredLogger, get_logger,
    session_context, region_context, operation_context
)
from .context import LoggingContext
from .decorators import log_operation
from .setup import setup_logging, setup_simple_logging, get_log_stats

__all__ = [
    'StructuredLogger',
    'get_logger',
    'session_context',
    'region_context',
    'operation_context',
    'LoggingContext',
    'log_operation',
    'setup_logging',
    'setup_simple_logging',
    'get_log_stats'
]
