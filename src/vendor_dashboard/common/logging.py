"""Structured JSON logging for the vendor dashboard.

Records are emitted as one JSON object per line on stdout. Bearer tokens,
signed session tokens and secret-named fields never reach the output:
they are masked in the message, in the request context fields and in
exception text.
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any

SENSITIVE_KEYS = {
    "password", "secret", "token", "access_token", "refresh_token",
    "apikey", "api_key", "authorization", "privileged_key", "token_signing_secret",
}

REDACTED = "**********"

# Context attached through ``extra=`` and copied into the JSON entry.
CONTEXT_FIELDS = ("vendor_id", "post_id", "config_id")

_BEARER = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9._~+/=-]+")
_JWT = re.compile(r"\beyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*")
_KEY_VALUE = re.compile(
    r"(?i)\b(" + "|".join(sorted(SENSITIVE_KEYS, key=len, reverse=True)) + r")"
    r"(\s*[=:]\s*)(?!bearer\b)([^\s,;&]+)"
)


def redact_text(text: str) -> str:
    text = _BEARER.sub(lambda m: f"{m.group(1)} {REDACTED}", text)
    text = _JWT.sub(REDACTED, text)
    return _KEY_VALUE.sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", text)


def redact_value(value: Any) -> Any:
    """Mask secret-named keys in nested dicts and lists; scrub token-shaped strings."""
    if isinstance(value, dict):
        return {
            k: REDACTED if isinstance(k, str) and k.lower() in SENSITIVE_KEYS else redact_value(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_value(v) for v in value]
    if isinstance(value, str):
        return redact_text(value)
    return value


class JSONFormatter(logging.Formatter):
    """Format log records as redacted JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_text(record.getMessage()),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = redact_value(value)
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = redact_text(self.formatException(record.exc_info))
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Configure the ``vendor_dashboard`` logger tree. Safe to call repeatedly."""
    root = logging.getLogger("vendor_dashboard")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.propagate = False
