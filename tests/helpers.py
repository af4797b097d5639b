"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: handles and responses shared by the
response suites.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Any

from predictive_client.models import HttpResponse


@dataclass
class ScriptedHandle:
    """Blocking handle returning a scripted sequence of results/exceptions.

    The last item repeats once the script is exhausted.
    """

    script: list[Any] = field(default_factory=list)
    calls: int = 0
    timeouts: list[float | None] = field(default_factory=list)

    def result(self, timeout: float | None = None) -> Any:
        self.calls += 1
        self.timeouts.append(timeout)
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        return item


@dataclass
class GateHandle:
    """Blocking handle that waits for ``release()`` before returning."""

    response: Any
    calls: int = 0
    _gate: threading.Event = field(default_factory=threading.Event)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def release(self) -> None:
        self._gate.set()

    def result(self, timeout: float | None = None) -> Any:
        with self._lock:
            self.calls += 1
        self._gate.wait(5.0)
        return self.response


@dataclass(frozen=True)
class UnreadableResponse:
    """Response whose body is present but fails to read."""

    status_code: int = 200
    status_text: str = "OK"
    content_type: str | None = "application/json"
    uri: str = "http://svc/query/model"
    error: Exception = field(default_factory=lambda: OSError("connection reset"))

    def has_body(self) -> bool:
        return True

    def body_text(self) -> str:
        raise self.error


def make_response(
    body: bytes | str | None, *, status: int = 200, text: str = "OK"
) -> HttpResponse:
    return HttpResponse(
        status,
        text,
        body=body,
        content_type="application/json",
        uri="http://svc/query/model",
    )
