"""
Success-or-error outcomes returned by the authentication service.

Expected failures (bad input, unknown user, wrong password) are values, not
exceptions::

    outcome = service.login(email, password)
    if outcome.ok:
        user = outcome.value
    else:
        print(outcome.error.message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

from .errors import AuthError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Failure:
    error: AuthError
    ok: bool = field(default=False, init=False)


Result = Union[Success[T], Failure]
