"""Typed failures raised while fetching weather data.

Every failure leaving the fetch pipeline is one of three kinds:

* ``NetworkError``: no response was received (connection refused, DNS, reset).
* ``ApiError``: the remote source answered but rejected the request or sent
  an unusable body.
* ``FetchTimeoutError``: the overall deadline for a fetch elapsed.
"""

from typing import ClassVar, Literal

FetchErrorKind = Literal["network", "api", "timeout"]

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class FetchError(Exception):
    """Base class for weather fetch failures."""

    kind: ClassVar[FetchErrorKind]
    retryable: ClassVar[bool]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FetchError):
            return NotImplemented
        return self.describe() == other.describe()

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def describe(self) -> dict[str, object]:
        """Return a serializable description of the failure."""
        return {"error": self.kind, "message": self.message}

    @staticmethod
    def coerce(exc: BaseException) -> "FetchError":
        """Return ``exc`` if already typed, otherwise a generic network error."""
        if isinstance(exc, FetchError):
            return exc
        return NetworkError(UNKNOWN_ERROR_MESSAGE)


class NetworkError(FetchError):
    """Transport-level failure; no response was received."""

    kind = "network"
    retryable = True

    def __repr__(self) -> str:
        return f"NetworkError({self.message!r})"


class ApiError(FetchError):
    """The remote source responded with a failure."""

    kind = "api"
    retryable = True

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code

    def describe(self) -> dict[str, object]:
        """Return a serializable description including the status code."""
        return {**super().describe(), "status_code": self.status_code}

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.message!r})"


class FetchTimeoutError(FetchError):
    """The overall deadline for a fetch elapsed."""

    kind = "timeout"
    retryable = False

    def __init__(self, message: str = "Request timed out") -> None:
        super().__init__(message)

    def __repr__(self) -> str:
        return f"FetchTimeoutError({self.message!r})"
