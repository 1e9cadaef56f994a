from .auth_controller import AuthController
from .misc_controller import MiscController

__all__ = ["AuthController", "MiscController"]
