# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import SpiderSettings, load_settings
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Asynchronous httpx client wrapper.

    A fresh ``httpx.AsyncClient`` is opened for every request so that no
    connection state is shared between calls or event loops. ``transport`` lets
    tests substitute ``httpx.MockTransport``.
    """

    def __init__(self, settings: SpiderSettings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or load_settings()
        self._transport = transport

    def _open(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            transport=self._transport,
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers)
        if not request.header("User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        try:
            async with self._open() as client:
                async with client.stream(
                    request.method.value,
                    request.url,
                    headers=headers,
                    content=request.body,
                ) as resp:
                    content = bytearray()
                    async for chunk in resp.aiter_bytes():
                        if not chunk:
                            continue
                        if len(content) + len(chunk) > max_body_bytes:
                            return HttpResponse(
                                ok=False,
                                status_code=resp.status_code,
                                headers=normalize_headers(resp.headers),
                                url=str(resp.url),
                                error_message=f"Response body exceeds limit of {max_body_bytes} bytes",
                                error_type="BodyTooLarge",
                                meta={"body_bytes_read": len(content) + len(chunk), "body_bytes_limit": max_body_bytes},
                            )
                        content.extend(chunk)
        except httpx.HTTPError as exc:
            logger.debug("httpx raised %s for %s", type(exc).__name__, request.describe())
            return HttpResponse.from_exception(exc)

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            content=bytes(content),
            url=str(resp.url),
            meta={
                "body_bytes_read": len(content),
                "http_version": resp.http_version,
            },
        )
