"""Structured logging configuration.

JSON lines in production, human-readable text in development. The only
secret this package handles is the collection API token, so redaction
covers ``Bearer`` headers and the configured token value itself.
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Iterable, Optional, TextIO

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_BEARER_RE = re.compile(r"(?i)\b(bearer\s+)\S+")
_REDACTED = "***REDACTED***"


class _JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _TokenRedactor(logging.Filter):
    """Mask API tokens in the rendered message and traceback text."""

    def __init__(self, tokens: Iterable[str] = ()):
        super().__init__()
        self.tokens = [t for t in tokens if t]

    def redact(self, text: str) -> str:
        for token in self.tokens:
            text = text.replace(token, _REDACTED)
        return _BEARER_RE.sub(lambda m: m.group(1) + _REDACTED, text)

    def filter(self, record: logging.LogRecord) -> bool:
        # Render args first so a token passed as a %s argument is caught too.
        record.msg = self.redact(record.getMessage())
        record.args = None
        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)
        return True


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    stream: Optional[TextIO] = None,
    secrets: Iterable[str] = (),
) -> None:
    """Configure application-wide logging.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL. Defaults to INFO.
        log_format: ``"json"`` for structured output, ``"text"`` for human-readable.
                    Defaults to ``"json"``.
        stream: Where records go. Defaults to stdout.
        secrets: Literal values to mask wherever they appear, e.g. the API token.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "json").lower()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(_TokenRedactor(secrets))

    if fmt == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured", extra={"level": level, "format": fmt}
    )
