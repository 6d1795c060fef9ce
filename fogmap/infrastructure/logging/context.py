"""Logging context management for map session correlation."""

from contextlib import contextmanager
from typing import Optional, Dict, Any, List
import uuid
import time
from datetime import datetime, timezone

from .structured_logger import (
    session_context, region_context, operation_context,
    get_logger
)


class LoggingContext:
    """Manages logging context for one map session.

    A session is the lifetime of one map view in the consuming
    application; operations are the engine calls made on its behalf
    (viewport selection, polygon emission, exploration statistics).
    Context is propagated to all log messages within scope.
    """

    def __init__(self, session_id: Optional[str] = None, region: Optional[str] = None):
        """Initialize logging context.

        Args:
            session_id: Session identifier (generated if not provided)
            region: Name of the fog region the session works on
        """
        self.session_id = session_id or str(uuid.uuid4())
        self.region = region
        self.operation_stack: List[str] = []
        self.timings: Dict[str, Dict[str, Any]] = {}
        self.logger = get_logger(self.__class__.__name__)

    @contextmanager
    def session(self, **metadata):
        """Context for a map session.

        Example:
            with ctx.session(user='42'):
                grid.visible_cells(viewport, zoom)
        """
        session_token = session_context.set(self.session_id)
        region_token = region_context.set(self.region)
        start_time = time.perf_counter()

        self.logger.info(
            f"Session started: {self.session_id}",
            extra={'context': metadata}
        )

        try:
            yield self
        finally:
            self.logger.log_performance(
                'session',
                time.perf_counter() - start_time,
                status='completed'
            )
            region_context.reset(region_token)
            session_context.reset(session_token)

    @contextmanager
    def operation(self, name: str, **metadata):
        """Context for a single engine operation within a session.

        Example:
            with ctx.operation('fog_polygons', zoom=9):
                ...
        """
        parent = self.operation_stack[-1] if self.operation_stack else None
        node_id = f"{parent}/{name}" if parent else name
        token = operation_context.set(node_id)
        self.operation_stack.append(node_id)

        start_time = time.perf_counter()

        self.logger.debug(
            f"Operation started: {name}",
            extra={'context': metadata}
        )

        try:
            yield self
            status = 'success'
        except Exception as e:
            status = 'failed'
            self.logger.log_error_with_context(e, operation=name, **metadata)
            raise
        finally:
            duration = time.perf_counter() - start_time
            self.timings[node_id] = {
                'duration': duration,
                'status': status,
                'timestamp': datetime.now(timezone.utc).isoformat()
            }
            self.logger.log_performance(name, duration, status=status, **metadata)

            self.operation_stack.pop()
            operation_context.reset(token)

    def get_timings(self) -> Dict[str, Dict[str, Any]]:
        """Get timing information for all operations."""
        return self.timings.copy()

    @property
    def current_operation(self) -> Optional[str]:
        """Get current operation node."""
        return self.operation_stack[-1] if self.operation_stack else None

