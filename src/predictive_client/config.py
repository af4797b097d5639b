"""Configuration: frozen Config with environment fallbacks."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from predictive_client.errors import ConfigurationError

load_dotenv()

_WAIT_TIMEOUT_ENV_VAR = "PREDICTIVE_CLIENT_WAIT_TIMEOUT_S"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for deferred responses.

    By default the wait on the underlying call is unbounded; the transport
    that issued the call owns its deadline.

    Example:
        config = Config(wait_timeout_s=30.0)
        response = DeferredResponse(future, config=config)
    """

    #: Auto-resolved from ``PREDICTIVE_CLIENT_WAIT_TIMEOUT_S`` when *None*.
    wait_timeout_s: float | None = None
    #: Upper bound on body characters included in debug log previews.
    body_preview_chars: int = 200

    def __post_init__(self) -> None:
        """Resolve environment fallbacks and validate values."""
        if self.wait_timeout_s is None:
            raw = os.environ.get(_WAIT_TIMEOUT_ENV_VAR, "").strip()
            if raw:
                try:
                    resolved = float(raw)
                except ValueError:
                    raise ConfigurationError(
                        f"{_WAIT_TIMEOUT_ENV_VAR} must be a number, got {raw!r}",
                        hint="Unset it to wait without a timeout.",
                    ) from None
                object.__setattr__(self, "wait_timeout_s", resolved)

        if self.wait_timeout_s is not None and self.wait_timeout_s <= 0:
            raise ConfigurationError(
                f"wait_timeout_s must be > 0, got {self.wait_timeout_s}",
                hint="Use None to wait without a timeout.",
            )
        if self.body_preview_chars < 0:
            raise ConfigurationError(
                f"body_preview_chars must be ≥ 0, got {self.body_preview_chars}",
                hint="This bounds how much of a body is written to debug logs.",
            )
