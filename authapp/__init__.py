"""AuthApp: email/password authentication with a local user store."""

__version__ = "1.0.0"
