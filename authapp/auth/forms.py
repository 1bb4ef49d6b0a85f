"""
Form state for the login and signup screens.

Both adapters (terminal client and HTTP routes) fill a form and submit it to
an AuthenticationService; the form keeps the user-facing error message.
"""

from __future__ import annotations

from dataclasses import dataclass

from authapp.models.user import User

from .errors import AuthError
from .result import Failure, Result
from .service import AuthenticationService


@dataclass
class LoginForm:
    email: str = ""
    password: str = ""
    error_message: str = ""
    is_authenticated: bool = False

    @property
    def is_form_valid(self) -> bool:
        return bool(self.email) and bool(self.password)

    def submit(self, service: AuthenticationService) -> Result[User]:
        self.error_message = ""
        outcome = service.login(self.email, self.password)
        _record(self, outcome)
        return outcome


@dataclass
class SignupForm:
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    error_message: str = ""
    is_authenticated: bool = False

    @property
    def is_form_valid(self) -> bool:
        return all((self.name, self.email, self.password, self.confirm_password))

    @property
    def passwords_match(self) -> bool:
        return self.password == self.confirm_password and bool(self.confirm_password)

    def submit(self, service: AuthenticationService) -> Result[User]:
        self.error_message = ""
        if self.password != self.confirm_password:
            outcome: Result[User] = Failure(AuthError.PASSWORDS_DO_NOT_MATCH)
        else:
            outcome = service.signup(self.name, self.email, self.password)
        _record(self, outcome)
        return outcome


def _record(form, outcome: Result[User]) -> None:
    if outcome.ok:
        form.is_authenticated = True
        form.error_message = ""
    else:
        form.is_authenticated = False
        form.error_message = outcome.error.message
