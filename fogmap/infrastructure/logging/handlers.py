"""Console and rotating file handlers for the fog engine logs."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from .formatters import HumanFormatter, JsonFormatter

DEFAULT_PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def stream_supports_color(stream) -> bool:
    """ANSI colors only on a TTY, and never with NO_COLOR or TERM=dumb."""
    isatty = getattr(stream, 'isatty', None)
    if isatty is None or not isatty():
        return False
    return not os.environ.get('NO_COLOR') and os.environ.get('TERM', '') != 'dumb'


class ConsoleHandler(logging.StreamHandler):
    """Human-formatted output, to stderr unless another stream is given."""

    def __init__(self,
                 stream=None,
                 use_colors: Optional[bool] = None,
                 show_context: bool = True,
                 level: int = logging.INFO):
        super().__init__(stream if stream is not None else sys.stderr)

        if use_colors is None:
            use_colors = stream_supports_color(self.stream)

        self.setFormatter(HumanFormatter(use_colors=use_colors, show_context=show_context))
        self.setLevel(level)


class FileHandler(RotatingFileHandler):
    """
    Size-rotated log file, JSON lines by default.

    The parent directory is created on demand. The handler accepts DEBUG
    records, so per-viewport performance records reach the file even when
    the console only shows INFO.
    """

    def __init__(self,
                 filename: Union[str, Path],
                 max_bytes: int = 10 * 1024 * 1024,
                 backup_count: int = 5,
                 encoding: str = 'utf-8',
                 use_json: bool = True,
                 plain_format: str = DEFAULT_PLAIN_FORMAT):
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)

        super().__init__(
            filename=str(path),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding
        )

        self.setFormatter(JsonFormatter() if use_json else logging.Formatter(plain_format))
        self.setLevel(logging.DEBUG)

    @classmethod
    def from_config(cls, config, filename: Optional[Union[str, Path]] = None) -> 'FileHandler':
        """Build from the ``logging`` section; ``filename`` overrides ``logging.file``."""
        if filename is None:
            filename = config.get('logging.file') or (
                Path(config.get('paths.logs_dir', 'logs')) / 'fogmap.log'
            )

        return cls(
            filename,
            max_bytes=config.get('logging.max_file_size', 10 * 1024 * 1024),
            backup_count=config.get('logging.backup_count', 5),
            plain_format=config.get('logging.format', DEFAULT_PLAIN_FORMAT),
        )
