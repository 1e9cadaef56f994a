# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from userauth.shared.errors import register_error_handler


def configure_error_handling(
    app: Flask, *, expose_internal_errors: bool = True, debug_mode: bool = False
) -> None:
    register_error_handler(
        app,
        expose_internal_errors=expose_internal_errors,
        debug_mode=debug_mode,
    )
