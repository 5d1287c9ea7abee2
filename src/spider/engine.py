# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request engine facade: one transport/decode pipeline, two calling conventions."""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from collections.abc import Callable, Coroutine, Mapping
from typing import Any, TypeVar, overload

from .config import SpiderSettings, load_settings
from .decoding import Decoder, JsonDecoder, decode
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpMethod, HttpRequest
from .log import RequestLogSink
from .result import Failure, Result
from .transport import TransportExecutor

logger = logging.getLogger(__name__)

T = TypeVar("T")

Completion = Callable[[Result[Any]], None]


class Spider:
    """
    Executes request descriptors and reports a single terminal Result per call.

    The engine keeps no per-request state beyond references to callback tasks it
    scheduled: the client, settings, decoder and sink are read-only collaborators,
    so one instance may serve any number of concurrent callers.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: SpiderSettings | None = None,
        decoder: Decoder | None = None,
        sink: RequestLogSink | None = None,
    ):
        self.settings = settings or load_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.decoder = decoder or JsonDecoder()
        self.executor = TransportExecutor(self.http_client, settings=self.settings, sink=sink)
        # The loop only holds weak references to tasks.
        self._pending: set[asyncio.Task[Result[Any]]] = set()

    async def _pipeline(self, request: HttpRequest, response_type: Any, logging: bool) -> Result[Any]:
        if not isinstance(request, HttpRequest):
            raise TypeError(f"Expected HttpRequest, got {type(request).__name__}")
        raw = await self.executor.execute(request, logging=logging)
        if isinstance(raw, Failure) or response_type is None or response_type is bytes:
            return raw
        result = decode(raw.value, response_type, self.decoder)
        if isinstance(result, Failure):
            logger.debug("Decoding %s failed: %s", request.describe(), result.error.message)
        return result

    @overload
    async def perform_request(self, request: HttpRequest, response_type: None = None, *, logging: bool = False) -> Result[bytes]: ...

    @overload
    async def perform_request(self, request: HttpRequest, response_type: type[T], *, logging: bool = False) -> Result[T]: ...

    async def perform_request(self, request, response_type=None, *, logging=False):
        """Await the request; returns raw bytes, or a ``response_type`` instance when one is given."""
        return await self._pipeline(request, response_type, logging)

    @overload
    def perform_request_with_callback(
        self,
        request: HttpRequest,
        on_complete: Callable[[Result[bytes]], None],
        response_type: None = None,
        *,
        logging: bool = False,
    ) -> Any: ...

    @overload
    def perform_request_with_callback(
        self,
        request: HttpRequest,
        on_complete: Callable[[Result[T]], None],
        response_type: type[T],
        *,
        logging: bool = False,
    ) -> Any: ...

    def perform_request_with_callback(self, request, on_complete, response_type=None, *, logging=False):
        """
        Start the request without blocking and call ``on_complete`` exactly once with its Result.

        Inside a running event loop the work is scheduled as a task on that loop and
        the task is returned. Without one, it runs on a daemon worker thread with its
        own loop and a ``concurrent.futures.Future`` is returned. Either handle
        resolves to the same Result after ``on_complete`` has been called.
        """
        if not isinstance(request, HttpRequest):
            raise TypeError(f"Expected HttpRequest, got {type(request).__name__}")
        if not callable(on_complete):
            raise TypeError("on_complete must be callable")

        coro = self._deliver(self._pipeline(request, response_type, logging), on_complete)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            task = loop.create_task(coro, name=f"spider:{request.describe()}")
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            return task

        future: concurrent.futures.Future[Result[Any]] = concurrent.futures.Future()
        worker = threading.Thread(
            target=_run_to_future,
            args=(coro, future),
            name=f"spider:{request.describe()}",
            daemon=True,
        )
        worker.start()
        return future

    @staticmethod
    async def _deliver(pipeline: Coroutine[Any, Any, Result[Any]], on_complete: Completion) -> Result[Any]:
        result = await pipeline
        try:
            on_complete(result)
        except Exception:  # noqa: BLE001
            logger.exception("Completion handler raised")
        return result

    def perform_request_sync(self, request: HttpRequest, response_type: Any = None, *, logging: bool = False) -> Result[Any]:
        """Blocking variant for scripts; must not be called from a running event loop."""
        return asyncio.run(self._pipeline(request, response_type, logging))

    async def request(
        self,
        url: str,
        *,
        method: HttpMethod | str = HttpMethod.GET,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
        response_type: Any = None,
        logging: bool = False,
    ) -> Result[Any]:
        """Build a descriptor from parts and await it; raises InvalidURLError before any network I/O."""
        descriptor = HttpRequest(url=url, method=method, headers=dict(headers or {}), body=body)
        return await self.perform_request(descriptor, response_type, logging=logging)


def _run_to_future(coro: Coroutine[Any, Any, Result[Any]], future: concurrent.futures.Future) -> None:
    if not future.set_running_or_notify_cancel():
        coro.close()
        return
    try:
        future.set_result(asyncio.run(coro))
    except Exception as exc:  # noqa: BLE001
        future.set_exception(exc)


__all__ = ["Spider"]
