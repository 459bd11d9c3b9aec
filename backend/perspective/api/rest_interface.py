"""REST Interface — start/stop lifecycle around an in-process uvicorn server.

Invariants:
    - start() returns only once the listening socket is bound (or raises)
    - stop() lets in-flight requests finish within shutdown_grace_seconds
    - stop() is idempotent and safe before start()

Design Decisions:
    - uvicorn.Server driven as a task instead of uvicorn.run: the bootstrap keeps
      ownership of the event loop and of the store connection
    - log_config=None: uvicorn logs through the handlers setup_logging installed
    - SIGINT/SIGTERM drain the server and return from serve() instead of being
      re-raised, so the bootstrap still releases the store afterwards
"""

import asyncio
import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator

import uvicorn
from fastapi import FastAPI
from uvicorn.server import HANDLED_SIGNALS

from perspective.config import Settings

_STARTUP_POLL_SECONDS = 0.05


class _DrainingServer(uvicorn.Server):
    """uvicorn.Server whose signal capture ends serving without re-raising."""

    @contextmanager
    def capture_signals(self) -> Iterator[None]:
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        previous = {sig: signal.signal(sig, self.handle_exit) for sig in HANDLED_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)


class RestInterface:
    """Serves a FastAPI app on the configured host and port."""

    def __init__(self, settings: Settings, app: FastAPI, logger: logging.Logger):
        self._settings = settings
        self._logger = logger.getChild("presentation.rest-interface")
        self._server = _DrainingServer(uvicorn.Config(
            app,
            host=settings.host,
            port=settings.port,
            timeout_graceful_shutdown=settings.shutdown_grace_seconds,
            log_config=None,
        ))
        self._task: asyncio.Task | None = None

    @property
    def started(self) -> bool:
        return self._server.started

    @property
    def bound_port(self) -> int:
        """Port actually bound; differs from settings.port when that is 0."""
        for server in getattr(self._server, "servers", []):
            for sock in server.sockets:
                return sock.getsockname()[1]
        return self._settings.port

    async def start(self) -> None:
        self._logger.info("Starting REST Interface")
        self._task = asyncio.create_task(self._server.serve())
        while not self._server.started:
            if self._task.done():
                task, self._task = self._task, None
                # Surface bind/startup failures (uvicorn exits instead of raising)
                task.result()
                raise RuntimeError(
                    f"REST Interface failed to start on port {self._settings.port}",
                )
            await asyncio.sleep(_STARTUP_POLL_SECONDS)
        self._logger.info(f"Listening on port {self.bound_port}")

    async def wait(self) -> None:
        """Block until the server exits (stop() or a termination signal)."""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._logger.info("Stopping REST Interface")
        self._server.should_exit = True
        task, self._task = self._task, None
        await task
        self._logger.info("REST Interface stopped")
