from __future__ import annotations

import re
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

# Same shape check as common "isEmail" validators: local@domain.tld, no spaces.
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_INVALID_EMAIL = "Please include a valid email"

# Column widths of users.username and users.email.
USERNAME_MAX_LENGTH = 64
EMAIL_MAX_LENGTH = 255

_EMAIL_TOO_LONG = f"Email must be at most {EMAIL_MAX_LENGTH} characters"


def _validate_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise PydanticCustomError("email_invalid", _INVALID_EMAIL, {})
    return value


class RequestDTO(BaseModel):
    """Base for request bodies.

    ``messages`` maps a field to the text reported for a failure on it; a
    ``"<field>.<error type>"`` key overrides it for that one error type.
    """

    messages: ClassVar[dict[str, str]] = {}


class RegisterRequestDTO(RequestDTO):
    messages: ClassVar[dict[str, str]] = {
        "username": "Username is required",
        "username.string_too_long": f"Username must be at most {USERNAME_MAX_LENGTH} characters",
        "email": _INVALID_EMAIL,
        "email.string_too_long": _EMAIL_TOO_LONG,
        "password": "Password must be at least 6 characters",
    }

    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    password: str = Field(min_length=6)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("missing", "Username cannot be empty", {})
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class LoginRequestDTO(RequestDTO):
    messages: ClassVar[dict[str, str]] = {
        "email": _INVALID_EMAIL,
        "email.string_too_long": _EMAIL_TOO_LONG,
        "password": "Password is required",
    }

    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    password: str  # No strength check on login

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class ForgotPasswordRequestDTO(RequestDTO):
    messages: ClassVar[dict[str, str]] = {
        "email": _INVALID_EMAIL,
        "email.string_too_long": _EMAIL_TOO_LONG,
    }

    email: str = Field(max_length=EMAIL_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class ResetPasswordRequestDTO(RequestDTO):
    messages: ClassVar[dict[str, str]] = {
        "token": "Token is required",
        "newPassword": "New password must be at least 6 characters",
    }

    token: str = Field(min_length=1)
    new_password: str = Field(alias="newPassword", min_length=6)


class UserSummaryDTO(BaseModel):
    id: int
    username: str
    email: str


class LoginResponseDTO(BaseModel):
    token: str
    user: UserSummaryDTO


class ForgotPasswordResponseDTO(BaseModel):
    reset_token: str = Field(serialization_alias="resetToken")


class MessageDTO(BaseModel):
    message: str


def dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True)
