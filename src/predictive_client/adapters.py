"""Adapters from httpx objects to the ``RawHttpResponse`` protocol."""

from __future__ import annotations

import concurrent.futures
from typing import TYPE_CHECKING

import httpx

from predictive_client.errors import BodyReadError

if TYPE_CHECKING:
    from collections.abc import Awaitable

_ASYNC_STREAM_HINT = (
    "Wrap AsyncClient calls with await_httpx() or call `await response.aread()` "
    "before wrapping."
)


def _read_failure(exc: Exception) -> BodyReadError:
    err = BodyReadError(str(exc) or type(exc).__name__)
    err.__cause__ = exc
    return err


class HttpxResponse:
    """``RawHttpResponse`` view of an ``httpx.Response``.

    Works for fully-read responses and unread sync streams; a sync stream is
    read once, on the first ``has_body()`` or ``body_text()`` call. Unread
    async streams must be read by the caller (see ``await_httpx``).
    """

    def __init__(
        self, response: httpx.Response, *, read_error: BodyReadError | None = None
    ) -> None:
        self.response = response
        self._read_error = read_error

    @property
    def status_code(self) -> int:
        """HTTP status code."""
        return self.response.status_code

    @property
    def status_text(self) -> str:
        """Reason phrase reported by httpx."""
        return self.response.reason_phrase

    @property
    def content_type(self) -> str | None:
        """``Content-Type`` header value."""
        return self.response.headers.get("content-type")

    @property
    def uri(self) -> str:
        """URL of the request that produced the response."""
        try:
            return str(self.response.request.url)
        except RuntimeError:
            # No request attached (responses built by hand in tests/mocks).
            return ""

    def _content(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        try:
            return self.response.content
        except httpx.ResponseNotRead:
            pass

        if not isinstance(self.response.stream, httpx.SyncByteStream):
            self._read_error = BodyReadError(
                "async response stream was not read", hint=_ASYNC_STREAM_HINT
            )
            raise self._read_error
        try:
            return self.response.read()
        except (httpx.StreamError, httpx.TransportError) as e:
            self._read_error = _read_failure(e)
            raise self._read_error from e

    def has_body(self) -> bool:
        """Whether the received body is non-empty.

        A body that fails to read counts as present so ``body_text()`` can
        report the failure.
        """
        try:
            return len(self._content()) > 0
        except BodyReadError:
            return True

    def body_text(self) -> str:
        """Read (if streamed) and decode the body."""
        self._content()
        try:
            return self.response.text
        except (UnicodeDecodeError, LookupError) as e:
            raise BodyReadError(f"cannot decode body: {e}") from e

    def __repr__(self) -> str:
        return f"HttpxResponse({self.response!r})"


def wrap_httpx(response: httpx.Response) -> HttpxResponse:
    """Wrap an ``httpx.Response`` as a ``RawHttpResponse``."""
    return HttpxResponse(response)


def defer_httpx_future(
    future: concurrent.futures.Future[httpx.Response],
) -> concurrent.futures.Future[HttpxResponse]:
    """Map a future of ``httpx.Response`` into a future of ``HttpxResponse``.

    Never blocks; failures and cancellation of *future* carry over.
    """
    mapped: concurrent.futures.Future[HttpxResponse] = concurrent.futures.Future()

    def _copy(done: concurrent.futures.Future[httpx.Response]) -> None:
        if done.cancelled():
            mapped.cancel()
            mapped.set_running_or_notify_cancel()
            return
        exc = done.exception()
        if exc is not None:
            mapped.set_exception(exc)
        else:
            mapped.set_result(HttpxResponse(done.result()))

    future.add_done_callback(_copy)
    return mapped


async def await_httpx(awaitable: Awaitable[httpx.Response]) -> HttpxResponse:
    """Await an ``httpx.AsyncClient`` call, read its body and wrap it.

    Streamed responses (``client.send(request, stream=True)``) are read here;
    a failed read is recorded on the wrapper, not raised.

    Example:
        response = AsyncDeferredResponse(await_httpx(client.get(url)))
    """
    response = await awaitable
    if isinstance(response.stream, httpx.AsyncByteStream):
        try:
            await response.aread()
        except (httpx.StreamError, httpx.TransportError) as e:
            return HttpxResponse(response, read_error=_read_failure(e))
    return HttpxResponse(response)
