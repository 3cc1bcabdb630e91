"""Error kinds and the result type returned by provider client operations.

Client operations never raise for expected failures. They return a
ClientResult holding either a value or a GeoError, and the HTTP layer picks a
status code from the error kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_RESPONSE_INVALID = "provider_response_invalid"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"


# Status code returned to API callers for each kind
HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PROVIDER_UNAVAILABLE: 500,
    ErrorKind.PROVIDER_RESPONSE_INVALID: 500,
    ErrorKind.TIMEOUT: 504,
}


@dataclass(frozen=True)
class GeoError:
    """A failed operation: what kind, a readable message and the underlying cause."""

    kind: ErrorKind
    message: str
    cause: Optional[BaseException] = None

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    @property
    def is_provider_failure(self) -> bool:
        return self.kind in (
            ErrorKind.PROVIDER_UNAVAILABLE,
            ErrorKind.PROVIDER_RESPONSE_INVALID,
            ErrorKind.TIMEOUT,
        )


@dataclass(frozen=True)
class ClientResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[GeoError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ClientResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> "ClientResult[T]":
        return cls(error=GeoError(kind=kind, message=message, cause=cause))
