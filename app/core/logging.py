import logging
import os
from typing import Optional


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | task=%(task)s attempt=%(attempt)s | %(message)s"
)

# Noisy at INFO: one line per Gemini request
_QUIET_LOGGERS = ("httpx", "httpcore")


class ContextFilter(logging.Filter):
    """Fills generation context fields (task kind, retry attempt) when a record lacks them."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for field in ("task", "attempt"):
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure the root logger once for the service or CLI process."""
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL).upper(), logging.INFO)
    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    # Clear existing handlers to avoid duplicate logs in reloads
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; ensure root is initialized."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
