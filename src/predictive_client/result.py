"""Tagged union for resolved response outcomes.

``DeferredResponse.outcome()`` returns one of these so callers can branch on
the type instead of checking which of ``result()`` / ``error_text()`` is set.
"""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A response whose body parsed into a JSON object."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E: Exception]:
    """A response that resolved to an HTTP-level error."""

    error: E


type Result[T, E: Exception] = Success[T] | Failure[E]
