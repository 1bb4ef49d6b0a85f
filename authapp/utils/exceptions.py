"""Custom exceptions for AuthApp"""


class AuthAppError(Exception):
    """Base exception for AuthApp"""
    pass


class ConfigError(AuthAppError):
    """Configuration error"""
    pass


class StorageError(AuthAppError):
    """Persistence substrate could not read or write a key"""

    def __init__(self, message: str, key: str = ""):
        self.key = key
        super().__init__(message)
