"""Small HTTP-related constants shared across predictive_client.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

HTTP_OK = 200
HTTP_NOT_FOUND = 404

NO_BODY_MESSAGE = "Error: Cannot find response body."
BAD_BODY_PREFIX = "Error: Bad response body. "
UNPARSEABLE_BODY_PREFIX = "Error: Cannot parse response body. "
SERVER_ERROR_PREFIX = "Error: "
