"""User commands."""

from .promote_user import PromoteUserCommand
from .register_user import RegisterUserCommand

__all__ = ["PromoteUserCommand", "RegisterUserCommand"]
