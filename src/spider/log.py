# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers and request diagnostic sinks for Spider."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .http.models import HttpRequest
    from .result import Result

DEFAULT_LOG_LEVEL = os.getenv("SPIDER_LOG_LEVEL", "WARNING").upper()
REQUEST_LOGGER_NAME = "spider.requests"


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for script/library use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


class RequestLogSink(Protocol):
    """Receives one line before dispatch and one after completion of each request."""

    def dispatched(self, request: HttpRequest) -> None: ...

    def completed(self, request: HttpRequest, result: Result, elapsed: float) -> None: ...


class NullSink:
    def dispatched(self, request: HttpRequest) -> None:  # noqa: ARG002
        return None

    def completed(self, request: HttpRequest, result: Result, elapsed: float) -> None:  # noqa: ARG002
        return None


class LoggingSink:
    """Writes request diagnostics to a stdlib logger (``spider.requests`` by default)."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger(REQUEST_LOGGER_NAME)
        self.level = level

    def dispatched(self, request: HttpRequest) -> None:
        self.logger.log(self.level, "-> %s %s", request.method.value, request.url)

    def completed(self, request: HttpRequest, result: Result, elapsed: float) -> None:
        if result.is_success:
            value = result.value
            size = len(value) if isinstance(value, (bytes, bytearray)) else None
            if size is not None:
                self.logger.log(self.level, "<- %s %s ok (%d bytes, %.3fs)", request.method.value, request.url, size, elapsed)
            else:
                self.logger.log(self.level, "<- %s %s ok (%.3fs)", request.method.value, request.url, elapsed)
            return
        error = result.error
        self.logger.log(
            self.level,
            "<- %s %s failed: %s: %s (%.3fs)",
            request.method.value,
            request.url,
            error.kind.value,
            error.message,
            elapsed,
        )


__all__ = ["DEFAULT_LOG_LEVEL", "LoggingSink", "NullSink", "REQUEST_LOGGER_NAME", "RequestLogSink", "setup_logging"]
