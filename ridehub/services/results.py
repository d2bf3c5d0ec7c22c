"""
Handler results.

Business operations return either a success value or a ``Failure``; only
the HTTP boundary turns a failure into an error response.
"""

from dataclasses import dataclass
from typing import TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Failure:
    """An anticipated business-rule failure with the HTTP status it maps to."""

    status_code: int
    message: str

    @classmethod
    def unauthorized(cls, message: str) -> "Failure":
        return cls(401, message)

    @classmethod
    def forbidden(cls, message: str) -> "Failure":
        return cls(403, message)

    @classmethod
    def not_found(cls, message: str) -> "Failure":
        return cls(404, message)

    @classmethod
    def conflict(cls, message: str) -> "Failure":
        return cls(409, message)


Outcome = Union[T, Failure]
