# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests; records every request it sees."""

    def __init__(self, responses: dict[str, HttpResponse | Responder] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[HttpRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def add(self, url: str, response: HttpResponse | Responder) -> None:
        self._responses[url] = response

    def add_json(self, url: str, body: str | bytes, status_code: int = 200) -> None:
        content = body.encode("utf-8") if isinstance(body, str) else body
        self.add(
            url,
            HttpResponse(ok=True, status_code=status_code, headers={"content-type": "application/json"}, content=content, url=url),
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        configured = self._responses.get(request.url)
        if configured is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured", error_type="StubMiss")
        if callable(configured):
            return configured(request)
        return configured
