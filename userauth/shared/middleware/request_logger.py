# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from typing import Any

from flask import Flask, Response, g, request

from userauth.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_HASHED_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_REDACTED_BODY_FIELDS = frozenset({"password", "newpassword", "token"})


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers() -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _HASHED_HEADERS else value
        for key, value in request.headers.items()
    }


def _safe_body() -> dict[str, Any] | None:
    body = request.get_json(silent=True, cache=True)
    if not isinstance(body, dict):
        return None
    return {
        key: "<redacted>" if key.lower() in _REDACTED_BODY_FIELDS else value
        for key, value in body.items()
    }


def _request_id() -> str:
    incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
    return incoming[:64] if incoming else secrets.token_urlsafe(8)


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _start() -> None:
        set_correlation_id(_request_id())
        g.request_started = time.perf_counter()

        if debug_mode:
            logger.debug(
                f"--> {request.method} {request.path} from {_client_ip()} "
                f"headers={_safe_headers()} body={_safe_body()}"
            )
        else:
            logger.info(f"--> {request.method} {request.path} from {_client_ip()}")

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        user = f" user={g.user_id}" if "user_id" in g else ""
        logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"in {elapsed_ms:.1f} ms{user}"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
