"""Bridge core - wiring, lifecycle and the stdio serve loop."""

from __future__ import annotations

import asyncio
import contextlib
import signal
from typing import BinaryIO

import structlog

from adb_rpc_bridge.artifacts.manager import ArtifactManager
from adb_rpc_bridge.config import BridgeConfig
from adb_rpc_bridge.device.client import DeviceClient
from adb_rpc_bridge.files.manager import FileManager
from adb_rpc_bridge.server.dispatcher import Dispatcher
from adb_rpc_bridge.server.stdio import StdoutWriter, open_stdin_reader, pump
from adb_rpc_bridge.tools.handlers import ToolHandlers

logger = structlog.get_logger()


class BridgeCore:
    """Central coordinator owning the shared device client."""

    def __init__(
        self,
        config: BridgeConfig | None = None,
        client: DeviceClient | None = None,
        output: BinaryIO | None = None,
    ) -> None:
        self.config = config or BridgeConfig()
        self.client = client or DeviceClient(host=self.config.adb_host, port=self.config.adb_port)
        self.file_manager = FileManager()
        self.artifact_manager = ArtifactManager(self.config.screenshots_dir, self.file_manager)
        self.handlers = ToolHandlers(self.client, self.artifact_manager, self.file_manager)
        self.writer = StdoutWriter(output)
        self.dispatcher = Dispatcher(self.handlers, self.writer.send)
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def serve(self, reader: asyncio.StreamReader | None = None) -> None:
        """Serve requests until the input closes or a stop signal arrives."""
        logger.info(
            "server_started",
            transport="stdio",
            adb=f"{self.config.adb_host}:{self.config.adb_port}",
            screenshots_dir=str(self.config.screenshots_dir),
        )
        self._running = True
        if reader is None:
            reader = await open_stdin_reader()

        pump_task = asyncio.create_task(pump(reader, self.dispatcher.handle_message))
        signals = self._install_signal_handlers(pump_task)
        try:
            with contextlib.suppress(asyncio.CancelledError):
                await pump_task
        finally:
            loop = asyncio.get_running_loop()
            for sig in signals:
                loop.remove_signal_handler(sig)

        await self.stop()

    async def stop(self) -> None:
        """Let in-flight tool calls answer, then mark stopped."""
        if not self._running:
            return
        logger.info("server_stopping", in_flight=self.dispatcher.in_flight)
        await self.dispatcher.drain()
        self._running = False
        logger.info("server_stopped")

    def _install_signal_handlers(self, pump_task: asyncio.Task[None]) -> list[signal.Signals]:
        loop = asyncio.get_running_loop()
        installed: list[signal.Signals] = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            # Not available on every platform's event loop.
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.add_signal_handler(sig, pump_task.cancel)
                installed.append(sig)
        return installed
