"""Internal helpers for development-time feature flags.

This module intentionally stays minimal. It centralizes how we check opt-in
debug toggles so semantics remain consistent across the codebase.
"""

from __future__ import annotations

import os

__all__ = ["body_preview_enabled"]


def body_preview_enabled(*, override: bool | None = None) -> bool:
    """Return True when response body previews may be written to debug logs.

    - If ``override`` is provided, it takes precedence.
    - Otherwise, returns True when the environment variable
      ``PREDICTIVE_CLIENT_LOG_BODY_PREVIEW`` is exactly ``"1"``.

    Bodies can carry user data, so previews stay off unless asked for.
    """
    if override is not None:
        return bool(override)
    return os.getenv("PREDICTIVE_CLIENT_LOG_BODY_PREVIEW") == "1"
