from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from http import HTTPStatus
from typing import Optional
from urllib.parse import unquote, urlsplit

from websockets.asyncio.server import ServerConnection, serve
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from .config import ServerConfig
from .content_types import HTML_CONTENT_TYPE
from .pages import INTERNAL_ERROR_HTML
from .responses import Outcome, PageResponse, build_response


def request_path_from_target(target: str) -> str:
    """Extract the percent-decoded path from a raw request target."""
    return unquote(urlsplit(target).path)


class PageServer:
    """Threaded asyncio server answering plain HTTP GETs with pages and assets."""

    def __init__(
        self,
        config: ServerConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("lime.server")
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_async: Optional[asyncio.Event] = None
        self._started = threading.Event()
        self._startup_error: Optional[Exception] = None
        self._bound_port: Optional[int] = None

    @property
    def config(self) -> ServerConfig:
        return self._config

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually listened on; differs from ``port`` when it is 0."""
        return self._bound_port

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._startup_error is None
        )

    def start(self, timeout_seconds: float = 5.0) -> None:
        if self.is_running:
            self._logger.warning("Page server is already running")
            return

        self._startup_error = None
        self._bound_port = None
        self._started.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            daemon=True,
            name="page-server",
        )
        self._thread.start()

        if not self._started.wait(timeout_seconds):
            raise RuntimeError(
                f"Page server did not start within {timeout_seconds:.1f}s"
            )

        if self._startup_error is not None:
            raise RuntimeError(f"Page server startup failed: {self._startup_error}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        if self._thread is None:
            return

        if self._loop and self._stop_async:
            with contextlib.suppress(RuntimeError):
                self._loop.call_soon_threadsafe(self._stop_async.set)

        self._thread.join(timeout=timeout_seconds)
        if self._thread.is_alive():
            self._logger.error(
                "Page server thread did not stop within %.1fs",
                timeout_seconds,
            )

        self._thread = None
        self._loop = None
        self._stop_async = None

    def _run_loop(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        self._stop_async = asyncio.Event()

        try:
            self._loop.run_until_complete(self._serve())
        except Exception as error:
            self._startup_error = error
            self._logger.error("Page server failed: %s", error, exc_info=True)
            self._started.set()
        finally:
            if self._loop is not None:
                pending = asyncio.all_tasks(self._loop)
                for task in pending:
                    task.cancel()
                with contextlib.suppress(Exception):
                    self._loop.run_until_complete(
                        asyncio.gather(*pending, return_exceptions=True)
                    )
                self._loop.close()

    async def _serve(self) -> None:
        async with serve(
            self._handler,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
        ) as server:
            sockets = list(server.sockets)
            self._bound_port = (
                sockets[0].getsockname()[1] if sockets else self._config.port
            )
            self._logger.info(
                "Page server running at http://%s:%d (pages: %s, static: %s)",
                self._config.host,
                self._bound_port,
                self._config.pages_dir,
                self._config.static_dir,
            )
            self._started.set()
            await self._stop_async.wait()

    async def _handler(self, websocket: ServerConnection) -> None:
        # Every plain request is answered in _process_request; nothing upgrades.
        await websocket.close(code=1008, reason="No websocket routes")

    async def _process_request(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response:
        del connection  # Unused in file routing.
        path = request_path_from_target(request.path)

        try:
            page = await build_response(path, self._config, logger=self._logger)
        except Exception as error:
            self._logger.error(
                "Unhandled error while serving %r: %s",
                path,
                error,
                exc_info=True,
            )
            page = PageResponse(
                Outcome.INTERNAL_ERROR,
                HTML_CONTENT_TYPE,
                INTERNAL_ERROR_HTML,
            )

        return self._response(page)

    def _response(self, page: PageResponse) -> Response:
        status = HTTPStatus(page.status)
        headers = Headers()
        headers["Content-Type"] = page.content_type
        headers["Content-Length"] = str(len(page.body))
        return Response(status.value, status.phrase, headers, page.body)
