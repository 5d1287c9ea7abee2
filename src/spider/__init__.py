# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Spider package entrypoint.

Spider builds validated HTTP requests, executes them with httpx and reports one
typed Result per call, either awaited or through a completion callback. Responses
can be decoded into pydantic models, dataclasses or TypedDicts. HTTP behavior is
abstracted behind an injectable client interface.
"""

from .config import SpiderSettings, load_settings
from .decoding import Decoder, JsonDecoder, decode
from .engine import Spider
from .errors import (
    DecodingError,
    ErrorCategory,
    ErrorKind,
    InvalidRequestError,
    InvalidURLError,
    SpiderError,
    TransportError,
)
from .http import (
    HttpClient,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import LoggingSink, NullSink, RequestLogSink, setup_logging
from .result import Failure, Result, Success, same_outcome
from .transport import TransportExecutor
from .version import __version__

__all__ = [
    "Decoder",
    "DecodingError",
    "ErrorCategory",
    "ErrorKind",
    "Failure",
    "HttpClient",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidRequestError",
    "InvalidURLError",
    "JsonDecoder",
    "LoggingSink",
    "NullSink",
    "RequestLogSink",
    "Result",
    "Spider",
    "SpiderError",
    "SpiderSettings",
    "StubHttpClient",
    "Success",
    "TransportError",
    "TransportExecutor",
    "create_default_http_client",
    "decode",
    "load_settings",
    "same_outcome",
    "setup_logging",
    "__version__",
]
