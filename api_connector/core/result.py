"""
Result type shared by the fetch pipeline.

A fetch never raises: it returns either an ``Ok`` holding the parsed payload
or an ``Err`` holding one of the ``FetchError`` variants below.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


@dataclass(frozen=True)
class ConnectionFailed:
    """DNS, TCP or timeout failure: no response was received."""

    message: str

    @property
    def status(self) -> int:
        return 500

    def __str__(self) -> str:
        return f"Connection failed: {self.message}"


@dataclass(frozen=True)
class HttpStatus:
    """The upstream answered with a non-2xx status."""

    code: int
    body: str
    reason: str = ""

    @property
    def status(self) -> int:
        # only error statuses can be mirrored as-is
        return self.code if 400 <= self.code < 600 else 502

    def __str__(self) -> str:
        return f"HTTP {self.code}: {self.reason}. Response: {self.body}"


@dataclass(frozen=True)
class InvalidPayload:
    """The upstream answered 2xx but the body is not JSON."""

    message: str

    @property
    def status(self) -> int:
        return 500

    def __str__(self) -> str:
        return f"Invalid payload: {self.message}"


@dataclass(frozen=True)
class MissingUrl:
    """No url was given: a configuration error, nothing was fetched."""

    @property
    def status(self) -> int:
        return 400

    def __str__(self) -> str:
        return "URL is required"


FetchError = Union[ConnectionFailed, HttpStatus, InvalidPayload, MissingUrl]


def error_to_dict(error: FetchError) -> dict[str, Any]:
    body: dict[str, Any] = {"kind": type(error).__name__, "message": str(error)}
    if isinstance(error, HttpStatus):
        body["code"] = error.code
    return body
