# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from userauth.application.use_cases.users import (
    ForgotPasswordUseCase,
    GetUserUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    ResetPasswordUseCase,
)
from userauth.domain.users.repositories import TokenIssuer
from userauth.interfaces.http.auth import auth_required, current_user_id
from userauth.interfaces.http.dto.auth import (
    ForgotPasswordRequestDTO,
    ForgotPasswordResponseDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    MessageDTO,
    RegisterRequestDTO,
    RequestDTO,
    ResetPasswordRequestDTO,
    UserSummaryDTO,
    dump,
)
from userauth.shared.errors.validation import raise_validation_error

D = TypeVar("D", bound=RequestDTO)


def _parse(dto_cls: type[D]) -> D:
    body: Any = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    try:
        return dto_cls.model_validate(body)
    except ValidationError as exc:
        raise_validation_error(exc, dto_cls.messages)


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        forgot_password_use_case: ForgotPasswordUseCase,
        reset_password_use_case: ResetPasswordUseCase,
        get_user_use_case: GetUserUseCase,
        tokens: TokenIssuer,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._forgot_password_use_case = forgot_password_use_case
        self._reset_password_use_case = reset_password_use_case
        self._get_user_use_case = get_user_use_case
        self._tokens = tokens

    def register(self) -> tuple[Response, int]:
        dto = _parse(RegisterRequestDTO)
        user = self._register_use_case.execute(dto.username, dto.email, dto.password)
        return jsonify(user.public_profile()), 201

    def login(self) -> tuple[Response, int]:
        dto = _parse(LoginRequestDTO)
        session = self._login_use_case.execute(dto.email, dto.password)
        payload = LoginResponseDTO(
            token=session.token,
            user=UserSummaryDTO(
                id=session.user.id,
                username=session.user.username,
                email=session.user.email,
            ),
        )
        return jsonify(dump(payload)), 200

    def forgot_password(self) -> tuple[Response, int]:
        dto = _parse(ForgotPasswordRequestDTO)
        reset_token = self._forgot_password_use_case.execute(dto.email)
        return jsonify(dump(ForgotPasswordResponseDTO(reset_token=reset_token))), 200

    def reset_password(self) -> tuple[Response, int]:
        dto = _parse(ResetPasswordRequestDTO)
        self._reset_password_use_case.execute(dto.token, dto.new_password)
        return jsonify(dump(MessageDTO(message="Password reset successful"))), 200

    def get_user(self) -> tuple[Response, int]:
        user = self._get_user_use_case.execute(current_user_id())
        return jsonify(user.public_profile()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/forgotpassword", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule("/resetpassword", view_func=self.reset_password, methods=["PUT"])
        bp.add_url_rule(
            "/user",
            endpoint="user",
            view_func=auth_required(self._tokens)(self.get_user),
            methods=["GET"],
        )
        return bp
