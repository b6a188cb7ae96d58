"""
Logging configuration: structured JSON or text output with secret masking

The library itself only attaches a NullHandler. LoggingConfig.configure()
is for hosts such as the CLI that want envget's log output.
"""
import json
import logging
import re
import sys
from typing import Any, Optional

from envget.core.config import get_settings


def describe_secret(v: Any) -> str:
    """Safe description of a value: its length only"""
    s = "" if v is None else str(v)
    return f"len={len(s)}"


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages"""

    SENSITIVE_PATTERNS = [
        (r'password["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'password": "***"'),
        (r'token["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'token": "***"'),
        (r'api[_-]?key["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'api_key": "***"'),
        (r'secret["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'secret": "***"'),
        (r'Bearer\s+([^\s"]+)', r'Bearer ***'),
    ]

    def __init__(self, enabled: bool = True):
        super().__init__()
        self.enabled = enabled

    def _mask(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask sensitive data"""
        if not self.enabled:
            return True

        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True


class ContextualFormatter(logging.Formatter):
    """JSON formatter, one object per line"""

    _RESERVED = frozenset([
        'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
        'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
        'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
        'exc_text', 'stack_info', 'taskName',
    ])

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_dict = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_dict['exception'] = self.formatException(record.exc_info)

        # fields passed through extra=
        for key, value in record.__dict__.items():
            if key in self._RESERVED:
                continue
            try:
                json.dumps(value)
                log_dict[key] = value
            except (TypeError, ValueError):
                log_dict[key] = str(value)

        return json.dumps(log_dict, ensure_ascii=False, default=str)


class LoggingConfig:
    """Logging setup for hosts that want envget output"""

    _configured = False
    _handler: Optional[logging.Handler] = None

    @classmethod
    def configure(cls, level: Optional[str] = None, stream=None):
        """Attach a handler to the envget logger according to settings"""
        if cls._configured:
            return

        settings = get_settings()

        if settings.log_format == "json":
            formatter = ContextualFormatter(datefmt='%Y-%m-%d %H:%M:%S')
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(formatter)
        handler.addFilter(SensitiveDataFilter(enabled=not settings.log_sensitive_data))

        logger = logging.getLogger("envget")
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.WARNING))

        cls._handler = handler
        cls._configured = True

    @classmethod
    def reset(cls):
        """Remove the handler installed by configure()"""
        if cls._handler is not None:
            logging.getLogger("envget").removeHandler(cls._handler)
        logging.getLogger("envget").setLevel(logging.NOTSET)
        cls._handler = None
        cls._configured = False

