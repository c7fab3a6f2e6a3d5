"""Logging setup that survives Unicode/emoji in user-supplied text."""
import logging
import sys
from typing import Any

from mychat.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Configure stdout for UTF-8 on Windows consoles
if sys.platform == 'win32':
    try:
        if hasattr(sys.stdout, 'reconfigure'):
            sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    except (OSError, ValueError):
        pass


class SafeStreamHandler(logging.StreamHandler):
    """
    Stream handler that never fails on characters the console cannot encode.
    Falls back to an ASCII rendering of the record instead of raising.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            self.stream.write(msg + self.terminator)
            self.flush()
        except (UnicodeEncodeError, UnicodeDecodeError):
            msg = self.format(record).encode('ascii', errors='replace').decode('ascii')
            self.stream.write(msg + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


_configured = False


def setup_logging(level: str = None) -> None:
    """Configure the root logger once. Safe to call repeatedly."""
    global _configured
    if _configured:
        return

    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))
    root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def safe_repr(obj: Any) -> str:
    """
    Safe representation function that handles Unicode characters.
    """
    try:
        return repr(obj)
    except (UnicodeEncodeError, UnicodeDecodeError):
        return str(obj).encode('ascii', errors='replace').decode('ascii')
