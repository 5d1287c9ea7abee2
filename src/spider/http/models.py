# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across Spider."""

from __future__ import annotations

import json as jsonlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import InvalidRequestError
from .headers import freeze_headers, header_value
from .url import validate_url

Headers = Mapping[str, str]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: HttpMethod | str) -> HttpMethod:
        if isinstance(value, HttpMethod):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidRequestError(f"Unsupported HTTP method: {value!r}")


@dataclass(frozen=True)
class HttpRequest:
    """
    Validated, immutable request descriptor.

    Construction is the only place URL validity is checked: an invalid URL raises
    InvalidURLError here and never reaches the network.
    """

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        validate_url(self.url)
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        object.__setattr__(self, "headers", freeze_headers(self.headers))

        body = self.body
        if isinstance(body, str):
            body = body.encode("utf-8")
        elif isinstance(body, (bytearray, memoryview)):
            body = bytes(body)
        elif body is not None and not isinstance(body, bytes):
            raise InvalidRequestError(f"Request body must be bytes or str, got {type(body).__name__}")
        object.__setattr__(self, "body", body)

    @classmethod
    def json(
        cls,
        url: str,
        payload: Any,
        *,
        method: HttpMethod | str = HttpMethod.POST,
        headers: Mapping[str, str] | None = None,
    ) -> HttpRequest:
        """Build a request whose body is ``payload`` serialized as JSON."""
        merged = dict(headers or {})
        if not header_value(merged, "Content-Type"):
            merged["Content-Type"] = "application/json"
        try:
            body = jsonlib.dumps(payload, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise InvalidRequestError(f"Payload is not JSON serializable: {exc}") from exc
        return cls(url=url, method=method, headers=merged, body=body)

    def __hash__(self) -> int:
        return hash((self.url, self.method, tuple(sorted(self.headers.items())), self.body))

    def header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        return header_value(self.headers, name, default)

    def with_headers(self, headers: Mapping[str, str]) -> HttpRequest:
        """Return a copy with ``headers`` merged over the existing ones."""
        merged = dict(self.headers)
        lowered = {name.lower() for name in headers}
        merged = {k: v for k, v in merged.items() if k.lower() not in lowered}
        merged.update(headers)
        return HttpRequest(url=self.url, method=self.method, headers=merged, body=self.body)

    def describe(self) -> str:
        return f"{self.method.value} {self.url}"


@dataclass
class HttpResponse:
    """Normalized HTTP response produced by HttpClient implementations."""

    ok: bool
    status_code: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error: BaseException | None = field(default=None, repr=False, compare=False)
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success_status(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @classmethod
    def from_exception(cls, exc: BaseException) -> HttpResponse:
        return cls(
            ok=False,
            error_message=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            error=exc,
        )


__all__ = ["Headers", "HttpMethod", "HttpRequest", "HttpResponse"]
