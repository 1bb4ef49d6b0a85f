"""Errors that can occur during authentication"""

from enum import Enum


class AuthError(str, Enum):
    EMPTY_NAME = "empty_name"
    EMPTY_EMAIL = "empty_email"
    EMPTY_PASSWORD = "empty_password"
    INVALID_EMAIL = "invalid_email"
    PASSWORD_TOO_SHORT = "password_too_short"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    USER_NOT_FOUND = "user_not_found"
    INCORRECT_PASSWORD = "incorrect_password"
    PERSISTENCE_FAILURE = "persistence_failure"
    # Raised by SignupForm only, never by the service
    PASSWORDS_DO_NOT_MATCH = "passwords_do_not_match"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    AuthError.EMPTY_NAME: "Please enter your name",
    AuthError.EMPTY_EMAIL: "Please enter your email address",
    AuthError.EMPTY_PASSWORD: "Please enter your password",
    AuthError.INVALID_EMAIL: "Please enter a valid email address",
    AuthError.PASSWORD_TOO_SHORT: "Password must be at least 6 characters",
    AuthError.EMAIL_ALREADY_EXISTS: "An account with this email already exists",
    AuthError.USER_NOT_FOUND: "No account found with this email",
    AuthError.INCORRECT_PASSWORD: "Incorrect password",
    AuthError.PERSISTENCE_FAILURE: "Could not save your account data. Please try again",
    AuthError.PASSWORDS_DO_NOT_MATCH: "Passwords do not match",
}
