"""Decorator that wraps an engine call in start, performance and failure records."""

import functools
import inspect
import logging
import time
from typing import Any, Callable, Dict, Optional, TypeVar

from .structured_logger import get_logger

F = TypeVar('F', bound=Callable[..., Any])

SCALAR_TYPES = (str, int, float, bool, type(None))


def _describe_arguments(func: Callable, args, kwargs) -> Dict[str, Any]:
    """Scalar arguments by value, everything else as ``<TypeName>``."""
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()
    return {
        name: value if isinstance(value, SCALAR_TYPES) else f"<{type(value).__name__}>"
        for name, value in bound.arguments.items()
    }


def _result_metrics(result: Any) -> Dict[str, Any]:
    if isinstance(result, (list, tuple, set, dict)):
        return {'items_processed': len(result)}
    return {}


def log_operation(operation_name: Optional[str] = None,
                  log_args: bool = False,
                  level: int = logging.INFO):
    """
    Log the start, duration and outcome of a function call.

    Args:
        operation_name: Name used in the records (defaults to the function name)
        log_args: Include scalar arguments in the start record
        level: Level of the start and performance records; failures are
            always logged at ERROR and re-raised

    Example:
        @log_operation("enumerate_cells")
        def _enumerate(self):
            ...
    """
    def decorator(func: F) -> F:
        name = operation_name or func.__name__
        logger = get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            context: Dict[str, Any] = {'operation': name}
            if log_args:
                context['arguments'] = _describe_arguments(func, args, kwargs)

            logger.log(level, f"Starting {name}", extra={'context': context})
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Failed {name}: {e}",
                    exc_info=True,
                    extra={
                        'context': context,
                        'performance': {
                            'duration_seconds': round(time.perf_counter() - start_time, 6),
                            'status': 'failed',
                            'error_type': type(e).__name__,
                        }
                    }
                )
                raise

            logger.log_performance(
                name,
                time.perf_counter() - start_time,
                level=level,
                status='success',
                **_result_metrics(result)
            )
            return result

        return wrapper  # type: ignore
    return decorator
