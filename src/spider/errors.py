# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorKind(str, Enum):
    """Closed set of failures a request can end in."""

    INVALID_URL = "invalidURL"
    TRANSPORT_FAILURE = "transportFailure"
    DECODING_FAILED = "decodingFailed"


class ErrorCategory(str, Enum):
    """Diagnostic detail for transport failures; not part of the taxonomy."""

    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class SpiderError(Exception):
    """
    Base class for every failure Spider reports.

    Errors compare by ``kind`` so results produced through different calling
    conventions can be checked against each other.
    """

    kind: ErrorKind

    def __init__(self, message: str = "", *, cause: BaseException | None = None):
        super().__init__(message or self.kind.value)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SpiderError):
            return self.kind == other.kind
        if isinstance(other, ErrorKind):
            return self.kind == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class InvalidURLError(SpiderError, ValueError):
    kind = ErrorKind.INVALID_URL

    def __init__(self, url: object, reason: str = "", *, cause: BaseException | None = None):
        self.url = url
        self.reason = reason or "not an absolute URL"
        super().__init__(f"Invalid URL {url!r}: {self.reason}", cause=cause)


class InvalidRequestError(ValueError):
    """Raised for descriptor fields other than the URL (unknown verb, bad body type)."""


class TransportError(SpiderError):
    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(
        self,
        message: str = "",
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause=cause)
        self.category = category
        self.status_code = status_code


class DecodingError(SpiderError):
    kind = ErrorKind.DECODING_FAILED

    def __init__(self, message: str = "", *, target: object = None, cause: BaseException | None = None):
        super().__init__(message, cause=cause)
        self.target = target


def _exception_chain(exc: BaseException, limit: int = 8) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and not any(current is seen for seen in chain) and len(chain) < limit:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException | None) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if exc is None:
        return ErrorCategory.UNKNOWN_ERROR

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps the socket/ssl error (via httpcore); the original sits further down the chain.
    for inner in _exception_chain(exc):
        if isinstance(inner, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(inner, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.HTTP_STATUS: "Server returned an error status",
        ErrorCategory.BODY_TOO_LARGE: "Response body exceeded the configured limit",
        ErrorCategory.UNKNOWN_ERROR: "Network error",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "DecodingError",
    "ErrorCategory",
    "ErrorKind",
    "InvalidRequestError",
    "InvalidURLError",
    "SpiderError",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
]
