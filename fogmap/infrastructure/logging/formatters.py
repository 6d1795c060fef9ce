"""Formatters for structured fog engine log records."""

import json
import logging
import traceback
from datetime import datetime
from typing import Any, Dict, Optional

# Context keys lifted out of ``context`` into the top level of JSON records
TOP_LEVEL_CONTEXT = ('session_id', 'region', 'operation')

# Context keys shown on the console, with their labels
CONSOLE_CONTEXT = (('session_id', 'session'), ('region', 'region'), ('operation', 'op'))


def _traceback_text(record: logging.LogRecord) -> Optional[str]:
    text = getattr(record, 'traceback', None)
    if not text and record.exc_info:
        text = ''.join(traceback.format_exception(*record.exc_info))
    return text or None


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, for log shipping and later analysis.

    ``session_id``, ``region`` and ``operation`` are promoted to the top
    level so the records of one map session can be filtered without
    digging into ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        context = dict(getattr(record, 'context', None) or {})

        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
            'thread': record.threadName,
        }
        for key in TOP_LEVEL_CONTEXT:
            if key in context:
                entry[key] = context.pop(key)
        if context:
            entry['context'] = context

        performance = getattr(record, 'performance', None)
        if performance:
            entry['performance'] = performance

        tb = _traceback_text(record)
        if tb:
            entry['traceback'] = tb

        return json.dumps(entry, separators=(',', ':'), default=str)


class HumanFormatter(logging.Formatter):
    """
    Compact console lines: time, level, logger, session tag, message.

    Performance records get a second line with the duration and the fog
    counters (cells, stride, zoom) when present.
    """

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.WARNING: '\033[93m',
        logging.ERROR: '\033[91m',
        logging.CRITICAL: '\033[95m',
    }
    RESET = '\033[0m'
    DIM = '\033[2m'
    BOLD = '\033[1m'
    NAME_WIDTH = 20

    def __init__(self, use_colors: bool = True, show_context: bool = True):
        super().__init__(datefmt='%Y-%m-%d %H:%M:%S')
        self.use_colors = use_colors
        self.show_context = show_context

    def _paint(self, text: str, color: str) -> str:
        if self.use_colors and color:
            return f"{color}{text}{self.RESET}"
        return text

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, '')

        head = [
            self._paint(self.formatTime(record, self.datefmt), self.DIM),
            self._paint(f"{record.levelname:8}", color),
            self._paint(f"[{self.short_name(record.name)}]", self.DIM),
        ]
        if self.show_context:
            tag = self.context_tag(getattr(record, 'context', None))
            if tag:
                head.append(self._paint(tag, self.BOLD))
        head.append(record.getMessage())
        lines = [' '.join(head)]

        summary = self.performance_summary(getattr(record, 'performance', None))
        if summary:
            lines.append(self._paint(f"  Performance: {summary}", self.DIM))

        tb = _traceback_text(record)
        if tb:
            lines.extend(self._paint(f"  {line}", color) for line in tb.rstrip().splitlines())

        return '\n'.join(lines)

    @staticmethod
    def context_tag(context: Optional[Dict[str, Any]]) -> str:
        """``[session:1a2b3c4d | region:taiwan | op:fog_polygons]`` or ''."""
        if not context:
            return ''

        parts = []
        for key, label in CONSOLE_CONTEXT:
            value = context.get(key)
            if not value:
                continue
            value = str(value)
            if key == 'session_id':
                value = value[:8]
            elif key == 'operation':
                value = value.rsplit('/', 1)[-1]
            parts.append(f"{label}:{value}")

        return f"[{' | '.join(parts)}]" if parts else ''

    @classmethod
    def short_name(cls, name: str) -> str:
        if len(name) <= cls.NAME_WIDTH:
            return name
        last = name.rsplit('.', 1)[-1]
        if len(last) <= cls.NAME_WIDTH - 3:
            return f"...{last}"
        return f"{name[:cls.NAME_WIDTH - 3]}..."

    @staticmethod
    def performance_summary(perf: Optional[Dict[str, Any]]) -> str:
        if not perf:
            return ''

        parts = []
        if 'duration_seconds' in perf:
            parts.append(f"{perf['duration_seconds']:.3f}s")
        if 'items_per_second' in perf:
            parts.append(f"{perf['items_per_second']:.1f} items/s")
        if 'cell_count' in perf:
            parts.append(f"{perf['cell_count']} cells")
        if perf.get('stride', 1) > 1:
            parts.append(f"stride {perf['stride']}")
        if perf.get('zoom') is not None:
            parts.append(f"zoom {perf['zoom']}")

        return ' | '.join(parts)
