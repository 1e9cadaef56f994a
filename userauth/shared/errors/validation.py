# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_errors(
    exc: PydanticValidationError,
    messages: Mapping[str, str] | None = None,
) -> list[dict[str, Any]]:
    messages = messages or {}
    errors_list = []

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)
        root_field = str(loc[0]) if loc else ""
        error_type = error.get("type", "value_error")

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error_type,
                "message": messages.get(
                    f"{root_field}.{error_type}",
                    messages.get(root_field, error.get("msg", "Invalid value")),
                ),
            }
        )

    return errors_list


def raise_validation_error(
    exc: PydanticValidationError, messages: Mapping[str, str] | None = None
) -> NoReturn:
    errors = format_pydantic_errors(exc, messages)
    raise ValidationError(errors=errors) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]
