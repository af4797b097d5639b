"""Exception hierarchy for predictive_client."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Iterator


class ErrorKind(enum.StrEnum):
    """Why a resolved response carries an error instead of a result.

    Transport failures are not a kind: they are raised, never recorded.
    """

    NOT_FOUND = "not_found"
    EMPTY_BODY = "empty_body"
    MALFORMED_BODY = "malformed_body"
    SERVER_ERROR = "server_error"
    BODY_READ_FAILURE = "body_read_failure"


class PredictiveClientError(Exception):
    """Base exception for all predictive_client errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(PredictiveClientError):
    """Configuration validation or resolution failed."""


class TransportError(PredictiveClientError):
    """The asynchronous call behind a response failed or was interrupted.

    Raised from the accessor that triggered resolution. The response stays
    unresolved, so a later access retries the wait from scratch. The original
    failure is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message, hint=hint)
        self.retryable = retryable


class BodyReadError(PredictiveClientError):
    """Reading an otherwise-present response body failed."""


class ResponseError(PredictiveClientError):
    """An HTTP-level failure recorded on a resolved response.

    Never raised by this package; carried inside ``Failure`` values so
    callers can branch on ``kind`` and ``status_code``.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        hint: str | None = None,
        status_code: int | None = None,
        uri: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.kind = kind
        self.status_code = status_code
        self.uri = uri


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)


def transport_hint(exc: BaseException) -> str | None:
    """Suggest a next step for common transport failures."""
    for e in _walk_exception_chain(exc):
        if isinstance(e, (TimeoutError, httpx.TimeoutException)):
            return "The call did not complete in time; raise Config.wait_timeout_s or retry."
        if isinstance(e, (ConnectionError, httpx.ConnectError)):
            return "Check that the service endpoint is reachable."
    return None
