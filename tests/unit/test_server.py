"""Tests for listen → fetch ordering in the server wiring."""

import asyncio
from typing import Any

from src.core.config import ServerConfig
from src.core.schemas import SearchOutcome
from src.web.server import build_server, serve, wait_until_listening

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeServer:
    """Mimics uvicorn.Server: ``started`` flips once listening, serve() blocks until stopped."""

    def __init__(self, *, fail_to_start: bool = False) -> None:
        self.started = False
        self._fail = fail_to_start
        self._stop = asyncio.Event()
        self.events: list[str] = []

    async def serve(self) -> None:
        await asyncio.sleep(0)
        if self._fail:
            self.events.append("failed")
            return
        self.started = True
        self.events.append("listening")
        await self._stop.wait()
        self.events.append("stopped")

    def stop(self) -> None:
        self._stop.set()


class FakeStartup:
    """Records when run() happens relative to the server; optionally never finishes."""

    def __init__(self, server: FakeServer, *, hang: bool = False) -> None:
        self._server = server
        self._hang = hang
        self.cancelled = False

    async def run(self) -> SearchOutcome:
        self._server.events.append(f"fetch(started={self._server.started})")
        if self._hang:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        self._server.stop()
        return SearchOutcome.fulfilled([])


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestServe:
    async def test_fetch_runs_after_listening(self) -> None:
        server = FakeServer()
        startup = FakeStartup(server)
        await serve(server, startup, ServerConfig())  # type: ignore[arg-type]
        assert server.events == ["listening", "fetch(started=True)", "stopped"]

    async def test_no_fetch_when_server_fails_to_start(self) -> None:
        server = FakeServer(fail_to_start=True)
        startup = FakeStartup(server)
        await serve(server, startup, ServerConfig())  # type: ignore[arg-type]
        assert server.events == ["failed"]

    async def test_pending_fetch_cancelled_on_shutdown(self) -> None:
        server = FakeServer()
        startup = FakeStartup(server, hang=True)

        async def stop_soon() -> None:
            while not any(e.startswith("fetch") for e in server.events):
                await asyncio.sleep(0)
            server.stop()

        stopper = asyncio.create_task(stop_soon())
        await serve(server, startup, ServerConfig())  # type: ignore[arg-type]
        await stopper
        assert startup.cancelled is True
        assert server.events[-1] == "stopped"


class TestWaitUntilListening:
    async def test_true_once_started(self) -> None:
        server = FakeServer()
        task = asyncio.create_task(server.serve())
        assert await wait_until_listening(server, task) is True  # type: ignore[arg-type]
        server.stop()
        await task

    async def test_false_when_task_ends_first(self) -> None:
        server = FakeServer(fail_to_start=True)
        task: Any = asyncio.create_task(server.serve())
        assert await wait_until_listening(server, task) is False  # type: ignore[arg-type]


class TestBuildServer:
    def test_uses_configured_address(self) -> None:
        from fastapi import FastAPI

        server = build_server(FastAPI(), ServerConfig(host="0.0.0.0", port=8123))
        assert server.config.host == "0.0.0.0"
        assert server.config.port == 8123
        assert server.config.log_config is None
