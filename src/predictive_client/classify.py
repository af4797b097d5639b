"""Classification: turn a raw HTTP response into a result or an error.

The step is a pure function of the response. ``DeferredResponse`` runs it
once and caches the ``Outcome``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from predictive_client._dev_flags import body_preview_enabled
from predictive_client._http import (
    BAD_BODY_PREFIX,
    HTTP_NOT_FOUND,
    HTTP_OK,
    NO_BODY_MESSAGE,
    SERVER_ERROR_PREFIX,
    UNPARSEABLE_BODY_PREFIX,
)
from predictive_client._json import JSONObject, parse_json_object
from predictive_client.errors import BodyReadError, ErrorKind, ResponseError
from predictive_client.result import Failure, Success

if TYPE_CHECKING:
    from predictive_client.models import RawHttpResponse
    from predictive_client.result import Result

log = logging.getLogger(__name__)

JSONParser = Callable[[str], Success[JSONObject] | Failure[Exception]]


@dataclass(frozen=True)
class Outcome:
    """Classification of one response: exactly one of result/error is set."""

    result: JSONObject | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("Outcome needs exactly one of result or error")

    @classmethod
    def ok(cls, value: JSONObject) -> Outcome:
        """Build a successful outcome."""
        return cls(result=value)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> Outcome:
        """Build an error outcome."""
        return cls(error=message, kind=kind)

    def to_result(
        self, *, status_code: int | None = None, uri: str | None = None
    ) -> Result[JSONObject, ResponseError]:
        """Express the outcome as a tagged union."""
        if self.result is not None:
            return Success(self.result)
        assert self.kind is not None and self.error is not None
        return Failure(
            ResponseError(self.error, kind=self.kind, status_code=status_code, uri=uri)
        )


def classify(
    response: RawHttpResponse,
    *,
    parser: JSONParser = parse_json_object,
    preview_chars: int = 200,
) -> Outcome:
    """Classify *response* into a parsed JSON object or an error message.

    - 404: the status text is the error.
    - No body: a fixed "no body" error.
    - 200 with a body: the body must parse as one JSON object.
    - Any other status with a body: the body text, prefixed with ``"Error: "``.
    - A failed body read is its own error.
    """
    code = response.status_code
    if code == HTTP_NOT_FOUND:
        return Outcome.failed(ErrorKind.NOT_FOUND, response.status_text)

    if not response.has_body():
        return Outcome.failed(ErrorKind.EMPTY_BODY, NO_BODY_MESSAGE)

    try:
        body = response.body_text()
    except (BodyReadError, OSError) as e:
        log.debug("Body read failed for %s: %s", response.uri, e)
        return Outcome.failed(ErrorKind.BODY_READ_FAILURE, f"{BAD_BODY_PREFIX}{e}")

    if body_preview_enabled():
        log.debug(
            "Response body preview (%s %s): %s",
            code,
            response.uri,
            _preview(body, preview_chars),
        )

    if code != HTTP_OK:
        return Outcome.failed(ErrorKind.SERVER_ERROR, f"{SERVER_ERROR_PREFIX}{body}")

    parsed = parser(body)
    if isinstance(parsed, Failure):
        return Outcome.failed(
            ErrorKind.MALFORMED_BODY, f"{UNPARSEABLE_BODY_PREFIX}{parsed.error}"
        )
    return Outcome.ok(parsed.value)


def _preview(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "…"
