"""AsyncDeferredResponse: the awaitable counterpart of ``DeferredResponse``.

Resolution is single-flight: concurrent accessors share one wait and one
classification, coordinated with an ``asyncio.Lock``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from predictive_client._json import parse_json_object
from predictive_client.classify import Outcome, classify
from predictive_client.config import Config
from predictive_client.errors import TransportError, transport_hint
from predictive_client.response import describe_failure

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from predictive_client._json import JSONObject
    from predictive_client.classify import JSONParser
    from predictive_client.errors import ErrorKind, ResponseError
    from predictive_client.models import RawHttpResponse
    from predictive_client.result import Result

log = logging.getLogger(__name__)


class AsyncDeferredResponse:
    """Wrap an awaitable call; resolve and classify it on first ``await``.

    Accepts an ``asyncio.Future``/``Task`` or a coroutine. A coroutine is
    promoted to a task on first resolution so a failed call can be awaited
    again. Cancelling the awaiting task propagates unchanged and leaves the
    response unresolved.

    Example:
        response = AsyncDeferredResponse(client.get(url))
        body = await response.result()
    """

    def __init__(
        self,
        handle: Awaitable[RawHttpResponse],
        *,
        config: Config | None = None,
        parser: JSONParser = parse_json_object,
    ) -> None:
        self._handle = handle
        self._awaitable: asyncio.Future[RawHttpResponse] | None = None
        self._config = config if config is not None else Config()
        self._parser = parser
        self._lock: asyncio.Lock | None = None
        self._raw: RawHttpResponse | None = None
        self._outcome: Outcome | None = None

    @property
    def resolved(self) -> bool:
        """Whether resolution has completed. Never triggers it."""
        return self._outcome is not None

    async def _resolve(self) -> tuple[RawHttpResponse, Outcome]:
        if self._outcome is not None and self._raw is not None:
            return self._raw, self._outcome

        # Created lazily so construction needs no running loop.
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self._outcome is not None and self._raw is not None:
                return self._raw, self._outcome

            log.debug("Resolving deferred response")
            raw = await self._wait()
            outcome = classify(
                raw,
                parser=self._parser,
                preview_chars=self._config.body_preview_chars,
            )
            self._raw = raw
            self._outcome = outcome
            log.debug(
                "Resolved %s %s: %s",
                raw.status_code,
                raw.uri,
                "ok" if outcome.kind is None else outcome.kind,
            )
            return raw, outcome

    def _future(self) -> asyncio.Future[RawHttpResponse]:
        if self._awaitable is None:
            self._awaitable = asyncio.ensure_future(self._handle)
        return self._awaitable

    async def _wait(self) -> RawHttpResponse:
        fut = self._future()
        timeout = self._config.wait_timeout_s
        try:
            if timeout is None:
                return await asyncio.shield(fut)
            return await asyncio.wait_for(asyncio.shield(fut), timeout)
        except asyncio.CancelledError as e:
            if not fut.cancelled():
                raise
            log.warning("Deferred call was cancelled")
            raise TransportError("call was cancelled", retryable=False) from e
        except Exception as e:
            log.warning("Deferred call failed: %s", describe_failure(e))
            raise TransportError(describe_failure(e), hint=transport_hint(e)) from e

    # --- Accessors ----------------------------------------------------------

    async def result(self) -> JSONObject | None:
        """Return the parsed JSON object, or None when the response is an error."""
        return (await self._resolve())[1].result

    async def error_text(self) -> str | None:
        """Return the error message, or None when the body parsed."""
        return (await self._resolve())[1].error

    async def error_kind(self) -> ErrorKind | None:
        """Return why the response is an error, or None on success."""
        return (await self._resolve())[1].kind

    async def ok(self) -> bool:
        """Return True when the body parsed into a JSON object."""
        return (await self._resolve())[1].result is not None

    async def outcome(self) -> Result[JSONObject, ResponseError]:
        """Return the resolved outcome as a ``Success``/``Failure`` value."""
        raw, outcome = await self._resolve()
        return outcome.to_result(status_code=raw.status_code, uri=raw.uri)

    async def result_as[M: BaseModel](self, model: type[M]) -> M | None:
        """Validate the parsed object into *model*; None on error or mismatch."""
        value = await self.result()
        if value is None:
            return None
        try:
            return model.model_validate(value)
        except ValidationError as e:
            log.debug("Result did not validate as %s: %s", model.__name__, e)
            return None

    async def content_type(self) -> str | None:
        """Return the response ``Content-Type``."""
        return (await self._resolve())[0].content_type

    async def status_code(self) -> int:
        """Return the HTTP status code."""
        return (await self._resolve())[0].status_code

    async def status_text(self) -> str:
        """Return the HTTP reason phrase."""
        return (await self._resolve())[0].status_text

    async def uri(self) -> str:
        """Return the URI the response came from."""
        return (await self._resolve())[0].uri

    async def raw_response(self) -> RawHttpResponse:
        """Return the raw response captured from the transport."""
        return (await self._resolve())[0]

    def raw_handle(self) -> Any:
        """Return the original awaitable without resolving it."""
        return self._handle

    def __repr__(self) -> str:
        outcome = self._outcome
        if outcome is None:
            return f"{type(self).__name__}(unresolved)"
        state = "ok" if outcome.kind is None else f"error={outcome.kind}"
        status = self._raw.status_code if self._raw is not None else None
        return f"{type(self).__name__}(status={status}, {state})"

