"""
Logging Configuration for confcrypt.

Provides centralized logging setup with a verbose toggle and either
human-readable or JSON-lines output.

Usage:
    from confcrypt.logging_config import setup_logging

    setup_logging(verbose=True)
    logger = logging.getLogger('confcrypt.config.installer')
"""

import json
import logging
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional


# =============================================================================
# CONFIGURATION STATE
# =============================================================================

@dataclass
class LoggingState:
    """Thread-safe logging configuration state."""
    verbose: bool = False
    log_file: Optional[str] = None
    json_format: bool = False
    _lock: threading.RLock = field(default_factory=threading.RLock)


_state = LoggingState()


# =============================================================================
# CUSTOM FORMATTER
# =============================================================================

class ConfcryptFormatter(logging.Formatter):
    """Formatter with color support and optional JSON output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33;1m',  # Bold yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[31;1m', # Bold red
        'RESET': '\033[0m',
    }

    def __init__(self, use_colors: bool = True, json_format: bool = False, stream=None):
        stream = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()
        self.json_format = json_format
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        if self.json_format:
            return self._format_json(record)
        return self._format_text(record)

    def _format_text(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        level_name = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level_name, '')
            reset = self.COLORS['RESET']
            level_str = f"{color}{level_name:8}{reset}"
        else:
            level_str = f"{level_name:8}"

        area = f"[{self._extract_area(record.name)}]"
        text = f"{timestamp} {level_str} {area:10} {record.getMessage()}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text

    def _format_json(self, record: logging.LogRecord) -> str:
        data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'area': self._extract_area(record.name),
        }

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        return json.dumps(data)

    def _extract_area(self, logger_name: str) -> str:
        """confcrypt.config.installer -> config"""
        parts = logger_name.split('.')
        if len(parts) >= 2 and parts[0] == 'confcrypt':
            return parts[1]
        return parts[0] if parts[0] else 'root'


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: bool = True,
    json_format: bool = False,
    stream=None,
) -> None:
    """
    Initialize the logging system.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Optional file path for log output
        console: Enable console output
        json_format: Use JSON format for logs
        stream: Console stream (stderr by default)
    """
    with _state._lock:
        _state.verbose = verbose
        _state.log_file = log_file
        _state.json_format = json_format

        base_level = logging.DEBUG if verbose else logging.INFO

        root = logging.getLogger()
        root.setLevel(base_level)

        for handler in root.handlers[:]:
            root.removeHandler(handler)

        if console:
            console_stream = stream if stream is not None else sys.stderr
            console_handler = logging.StreamHandler(console_stream)
            console_handler.setLevel(base_level)
            console_handler.setFormatter(ConfcryptFormatter(
                use_colors=True,
                json_format=json_format,
                stream=console_stream,
            ))
            root.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(base_level)
            file_handler.setFormatter(ConfcryptFormatter(
                use_colors=False,
                json_format=json_format
            ))
            root.addHandler(file_handler)


def set_verbose(enabled: bool) -> None:
    """Toggle verbose mode at runtime."""
    with _state._lock:
        _state.verbose = enabled
        level = logging.DEBUG if enabled else logging.INFO

        root = logging.getLogger()
        root.setLevel(level)

        for handler in root.handlers:
            handler.setLevel(level)
