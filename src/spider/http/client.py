# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from typing import Protocol

from ..config import SpiderSettings, load_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Minimal protocol for issuing one HTTP request.

    Implementations report stack-level failures as ``HttpResponse(ok=False, ...)``;
    exceptions that still escape are treated as transport failures by the executor.
    """

    async def request(self, request: HttpRequest) -> HttpResponse: ...


def create_default_http_client(settings: SpiderSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_settings())
