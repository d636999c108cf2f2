from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from functools import wraps
from typing import Any, Callable

from flask import request, g, current_app, copy_current_request_context

from models import storage
from utils.errors import RequestTimeout, Unauthorized

logger = logging.getLogger(__name__)


def bearer_token() -> str:
    """Extract the token from ``Authorization: Bearer <token>`` or raise Unauthorized."""
    auth = request.headers.get("Authorization", "")
    if not auth:
        raise Unauthorized("No authorization header")
    scheme, _, token = auth.partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token:
        raise Unauthorized("Invalid authorization header format")
    return token


def jwt_required():
    """Require a valid access token; the identity is exposed as ``g.current_user``."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            token_manager = current_app.extensions["token_manager"]
            g.current_user = token_manager.validate_access_token(token)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def run_with_deadline(fn: Callable[[], Any], seconds: float) -> Any:
    """
    Run ``fn`` in a worker thread and wait at most ``seconds`` for it.
    On timeout the worker is abandoned (not killed) and RequestTimeout is raised.
    """
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(fn)
    try:
        return future.result(timeout=seconds)
    except FutureTimeout:
        future.cancel()
        raise RequestTimeout("Request timeout exceeded")
    finally:
        executor.shutdown(wait=False)


def request_timeout():
    """Abandon the view after ``REQUEST_TIMEOUT`` seconds. 0 runs it inline."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            seconds = current_app.config.get("REQUEST_TIMEOUT", 0)
            if not seconds:
                return fn(*args, **kwargs)

            @copy_current_request_context
            def call():
                try:
                    return fn(*args, **kwargs)
                finally:
                    # The worker thread has its own scoped session
                    storage.close()

            try:
                return run_with_deadline(call, seconds)
            except RequestTimeout:
                logger.warning("%s %s exceeded %ss", request.method, request.path, seconds)
                raise

        return wrapper

    return decorator
