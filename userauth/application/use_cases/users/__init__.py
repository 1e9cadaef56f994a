from .forgot_password import ForgotPasswordUseCase
from .get_user import GetUserUseCase
from .login_user import LoginUserUseCase
from .register_user import RegisterUserUseCase
from .reset_password import ResetPasswordUseCase

__all__ = [
    "ForgotPasswordUseCase",
    "GetUserUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "ResetPasswordUseCase",
]
