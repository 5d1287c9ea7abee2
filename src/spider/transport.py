# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-attempt transport stage: request descriptor in, raw bytes (or TransportError) out."""

from __future__ import annotations

import logging
import time

from .config import SpiderSettings, load_settings
from .errors import ErrorCategory, TransportError, categorize_exception, error_category_to_reason
from .http.client import HttpClient
from .http.models import HttpRequest, HttpResponse
from .log import LoggingSink, NullSink, RequestLogSink
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)


def response_to_result(response: HttpResponse, *, accept_error_status: bool = False) -> Result[bytes]:
    """Classify a normalized response as raw bytes or a TransportError."""
    if not response.ok:
        if response.error_type == "BodyTooLarge":
            category = ErrorCategory.BODY_TOO_LARGE
        else:
            category = categorize_exception(response.error)
        reason = response.error_message or error_category_to_reason(category)
        return Failure(
            TransportError(
                reason,
                category=category,
                status_code=response.status_code,
                cause=response.error,
            )
        )

    if response.status_code is not None and not response.is_success_status and not accept_error_status:
        return Failure(
            TransportError(
                f"HTTP {response.status_code} from {response.url or 'server'}",
                category=ErrorCategory.HTTP_STATUS,
                status_code=response.status_code,
            )
        )

    return Success(response.content)


class TransportExecutor:
    """
    Performs exactly one network attempt per call.

    The executor never decodes and never retries. When ``logging`` is requested it
    reports to the sink once before dispatch and once after completion.
    """

    def __init__(
        self,
        client: HttpClient,
        *,
        settings: SpiderSettings | None = None,
        sink: RequestLogSink | None = None,
    ):
        self.client = client
        self.settings = settings or load_settings()
        self.sink = sink or LoggingSink()

    async def execute(self, request: HttpRequest, *, logging: bool = False) -> Result[bytes]:
        sink = self.sink if logging else NullSink()
        _notify(sink.dispatched, request)
        started = time.monotonic()

        try:
            response = await self.client.request(request)
        except Exception as exc:  # noqa: BLE001
            logger.debug("HttpClient raised for %s", request.describe(), exc_info=True)
            response = HttpResponse.from_exception(exc)

        result = response_to_result(response, accept_error_status=self.settings.accept_error_status)
        _notify(sink.completed, request, result, time.monotonic() - started)
        return result


def _notify(hook, *args) -> None:
    """Invoke a sink hook; a failing sink must not change the request outcome."""
    try:
        hook(*args)
    except Exception:  # noqa: BLE001
        logger.warning("Request log sink failed", exc_info=True)


__all__ = ["TransportExecutor", "response_to_result"]
