"""
Logging helpers for service operations.

Service methods wrap their body in ``log_operation`` so entry, success and
failure are logged with the elapsed time. Argument values are passed through
``redact`` first so secrets never reach the log stream.
"""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

REDACTED = "***REDACTED***"

SENSITIVE_FIELDS = frozenset({
    "password",
    "passwordHash",
    "password_hash",
    "token",
    "accessToken",
    "access_token",
    "refreshToken",
    "refresh_token",
})


def redact(value: Any, sensitive: frozenset[str] = SENSITIVE_FIELDS) -> Any:
    """Return a copy of ``value`` with sensitive mapping keys masked (recursively)."""
    if isinstance(value, dict):
        return {
            k: (REDACTED if k in sensitive else redact(v, sensitive))
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(redact(v, sensitive) for v in value)
    return value


@contextmanager
def log_operation(logger: logging.Logger, name: str, **fields: Any) -> Iterator[None]:
    logger.info("[%s] Entry - Args: %s", name, redact(fields))
    start = time.perf_counter()
    try:
        yield
    except Exception as exc:
        elapsed = (time.perf_counter() - start) * 1000
        logger.error("[%s] Error - Execution time: %.1fms - %s", name, elapsed, exc)
        raise
    elapsed = (time.perf_counter() - start) * 1000
    logger.info("[%s] Success - Execution time: %.1fms", name, elapsed)
