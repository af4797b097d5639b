"""predictive_client: lazy, memoized responses from a remote prediction service.

Public API:
    - DeferredResponse: wraps a blocking handle (e.g. ``concurrent.futures.Future``)
    - AsyncDeferredResponse: wraps an awaitable
    - HttpResponse / RawHttpResponse: response value type and protocol
    - Config: Configuration dataclass
"""

from __future__ import annotations

import logging

from predictive_client.adapters import (
    HttpxResponse,
    await_httpx,
    defer_httpx_future,
    wrap_httpx,
)
from predictive_client.aio import AsyncDeferredResponse
from predictive_client.classify import Outcome, classify
from predictive_client.config import Config
from predictive_client.errors import (
    BodyReadError,
    ConfigurationError,
    ErrorKind,
    PredictiveClientError,
    ResponseError,
    TransportError,
)
from predictive_client.models import CallHandle, HttpResponse, RawHttpResponse
from predictive_client.response import DeferredResponse
from predictive_client.result import Failure, Result, Success

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("predictive-client")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("predictive_client").addHandler(logging.NullHandler())

__all__ = [
    "AsyncDeferredResponse",
    "BodyReadError",
    "CallHandle",
    "Config",
    "ConfigurationError",
    "DeferredResponse",
    "ErrorKind",
    "Failure",
    "HttpResponse",
    "HttpxResponse",
    "Outcome",
    "PredictiveClientError",
    "RawHttpResponse",
    "ResponseError",
    "Result",
    "Success",
    "TransportError",
    "await_httpx",
    "classify",
    "defer_httpx_future",
    "wrap_httpx",
]
