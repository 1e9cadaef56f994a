# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction of credentials and tokens before log records reach a sink."""

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

# (pattern, replacement, flags); applied in order, so JWTs are masked whole
# before the generic ``token=`` rule sees them.
SENSITIVE_PATTERNS: list[tuple[str, str, int]] = [
    # Signing secrets
    (r"((?:jwt|secret)[_-]?(?:secret|key)\s*[:=]\s*['\"]?)([^'\"\s,}]{4,})", rf"\1{_REDACTED}", re.IGNORECASE),

    # Bearer credentials and JWTs
    (r"(authorization\s*:\s*['\"]?)(bearer\s+)?([^'\"\s,}]{10,})", rf"\1\2{_REDACTED}", re.IGNORECASE),
    (r"(bearer\s+)([a-zA-Z0-9_\-\.]{20,})", rf"\1{_REDACTED}", re.IGNORECASE),
    (r"eyJ[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+", "***JWT***", 0),
    (r"((?:reset[_-]?)?token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{20,})", rf"\1{_REDACTED}", re.IGNORECASE),

    # Passwords, plain and hashed
    (r"(password[_-]?hash\s*[:=]\s*['\"]?)([^'\"\s,}]+)", rf"\1{_REDACTED}", re.IGNORECASE),
    (r"((?:new[_-]?)?password\s*[:=]\s*['\"]?)([^'\"\s,}]+)", rf"\1{_REDACTED}", re.IGNORECASE),

    # Database URLs with credentials
    (r"((?:postgres(?:ql)?|mysql|mariadb)(?:\+\w+)?://[^:/@\s]+:)([^@\s]+)@", rf"\1{_REDACTED}@", 0),

    # Email addresses keep only the domain
    (r"[a-zA-Z0-9._%+-]+@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", r"***@\1", 0),
]

_COMPILED = [
    (re.compile(pattern, flags), replacement)
    for pattern, replacement, flags in SENSITIVE_PATTERNS
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _COMPILED:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """loguru filter: rewrite the message in place and always keep the record."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message", "sanitize_record"]
