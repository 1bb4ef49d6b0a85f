"""Authentication core: service, outcomes and form state."""

from .errors import AuthError
from .forms import LoginForm, SignupForm
from .result import Failure, Result, Success
from .service import AuthenticationService

__all__ = [
    "AuthError",
    "AuthenticationService",
    "Failure",
    "LoginForm",
    "Result",
    "SignupForm",
    "Success",
]
