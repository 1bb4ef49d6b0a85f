"""Input checks shared by the service and the forms."""

import re

MIN_PASSWORD_LENGTH = 6

# Syntactic sanity check only, not RFC 5322
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None
