# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import header_value, normalize_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpMethod, HttpRequest, HttpResponse
from .url import is_valid_url, validate_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpMethod",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "header_value",
    "is_valid_url",
    "normalize_headers",
    "validate_url",
]
