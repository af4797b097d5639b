"""Collaborator protocols and the plain ``HttpResponse`` value type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from predictive_client.errors import BodyReadError


@runtime_checkable
class RawHttpResponse(Protocol):
    """A completed HTTP response as produced by the transport."""

    @property
    def status_code(self) -> int:
        """Numeric HTTP status."""
        ...

    @property
    def status_text(self) -> str:
        """Reason phrase (``"Not Found"``)."""
        ...

    @property
    def content_type(self) -> str | None:
        """Value of the ``Content-Type`` header, if any."""
        ...

    @property
    def uri(self) -> str:
        """URI the response was fetched from."""
        ...

    def has_body(self) -> bool:
        """Whether the response carries a non-empty body."""
        ...

    def body_text(self) -> str:
        """Return the body as text; raise ``BodyReadError`` or ``OSError`` on failure."""
        ...


@runtime_checkable
class CallHandle(Protocol):
    """A blocking handle to an in-flight call, e.g. ``concurrent.futures.Future``."""

    def result(self, timeout: float | None = None) -> Any:
        """Block until the call completes and return its response."""
        ...


@dataclass(frozen=True)
class HttpResponse:
    """A fully-read HTTP response built from plain values.

    Example:
        HttpResponse(200, "OK", body=b'{"a": 1}', content_type="application/json")
    """

    status_code: int
    status_text: str = ""
    body: bytes | str | None = None
    content_type: str | None = None
    uri: str = ""
    encoding: str = "utf-8"

    def has_body(self) -> bool:
        """Return True for a present, non-empty body."""
        return bool(self.body)

    def body_text(self) -> str:
        """Decode the body; undecodable bytes are a read failure."""
        if self.body is None:
            return ""
        if isinstance(self.body, str):
            return self.body
        try:
            return self.body.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise BodyReadError(
                f"cannot decode body as {self.encoding}: {e}",
                hint="Pass the charset from the Content-Type header as encoding=...",
            ) from e
