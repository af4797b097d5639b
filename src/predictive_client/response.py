"""DeferredResponse: lazy, memoized view of an in-flight HTTP call."""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from predictive_client._json import parse_json_object
from predictive_client.classify import Outcome, classify
from predictive_client.config import Config
from predictive_client.errors import TransportError, transport_hint

if TYPE_CHECKING:
    from predictive_client._json import JSONObject
    from predictive_client.classify import JSONParser
    from predictive_client.errors import ErrorKind, ResponseError
    from predictive_client.models import CallHandle, RawHttpResponse
    from predictive_client.result import Result

log = logging.getLogger(__name__)


def describe_failure(exc: BaseException) -> str:
    """Message for a wrapped transport failure: the cause's text or its type."""
    return str(exc) or type(exc).__name__


class DeferredResponse:
    """Wrap a pending call; resolve and classify it on first access.

    Nothing blocks at construction. The first accessor call waits on the
    handle, stores the raw response and classifies it once; every later call
    reads the cached state. HTTP-level failures (404, non-200, empty or
    malformed bodies) are recorded, not raised: check ``result()`` for
    ``None`` and read ``error_text()``. Transport failures raise
    ``TransportError`` and leave the response unresolved so a later call
    can retry.

    Example:
        response = DeferredResponse(executor.submit(fetch, url))
        if response.result() is None:
            print(response.status_code(), response.error_text())
    """

    def __init__(
        self,
        handle: CallHandle,
        *,
        config: Config | None = None,
        parser: JSONParser = parse_json_object,
    ) -> None:
        self._handle = handle
        self._config = config if config is not None else Config()
        self._parser = parser
        self._lock = threading.Lock()
        self._raw: RawHttpResponse | None = None
        self._outcome: Outcome | None = None

    # --- Resolution ---------------------------------------------------------

    @property
    def resolved(self) -> bool:
        """Whether resolution has completed. Never triggers it."""
        return self._outcome is not None

    def _resolve(self) -> tuple[RawHttpResponse, Outcome]:
        outcome = self._outcome
        if outcome is not None and self._raw is not None:
            return self._raw, outcome

        with self._lock:
            if self._outcome is not None and self._raw is not None:
                return self._raw, self._outcome

            log.debug("Resolving deferred response")
            raw = self._wait()
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

    def _wait(self) -> RawHttpResponse:
        timeout = self._config.wait_timeout_s
        try:
            if timeout is None:
                return self._handle.result()
            return self._handle.result(timeout=timeout)
        except (Exception, concurrent.futures.CancelledError) as e:
            log.warning("Deferred call failed: %s", describe_failure(e))
            raise TransportError(describe_failure(e), hint=transport_hint(e)) from e

    # --- Accessors ----------------------------------------------------------

    def result(self) -> JSONObject | None:
        """Return the parsed JSON object, or None when the response is an error."""
        return self._resolve()[1].result

    def error_text(self) -> str | None:
        """Return the error message, or None when the body parsed."""
        return self._resolve()[1].error

    def error_kind(self) -> ErrorKind | None:
        """Return why the response is an error, or None on success."""
        return self._resolve()[1].kind

    def ok(self) -> bool:
        """Return True when the body parsed into a JSON object."""
        return self._resolve()[1].result is not None

    def outcome(self) -> Result[JSONObject, ResponseError]:
        """Return the resolved outcome as a ``Success``/``Failure`` value."""
        raw, outcome = self._resolve()
        return outcome.to_result(status_code=raw.status_code, uri=raw.uri)

    def result_as[M: BaseModel](self, model: type[M]) -> M | None:
        """Validate the parsed object into *model*.

        Returns None when the response is an error or does not validate.
        """
        value = self.result()
        if value is None:
            return None
        try:
            return model.model_validate(value)
        except ValidationError as e:
            log.debug("Result did not validate as %s: %s", model.__name__, e)
            return None

    def content_type(self) -> str | None:
        """Return the response ``Content-Type``."""
        return self._resolve()[0].content_type

    def status_code(self) -> int:
        """Return the HTTP status code."""
        return self._resolve()[0].status_code

    def status_text(self) -> str:
        """Return the HTTP reason phrase."""
        return self._resolve()[0].status_text

    def uri(self) -> str:
        """Return the URI the response came from."""
        return self._resolve()[0].uri

    def raw_response(self) -> RawHttpResponse:
        """Return the raw response captured from the transport."""
        return self._resolve()[0]

    def raw_handle(self) -> Any:
        """Return the original handle without resolving it."""
        return self._handle

    def __repr__(self) -> str:
        outcome = self._outcome
        if outcome is None:
            return f"{type(self).__name__}(unresolved)"
        state = "ok" if outcome.kind is None else f"error={outcome.kind}"
        status = self._raw.status_code if self._raw is not None else None
        return f"{type(self).__name__}(status={status}, {state})"
