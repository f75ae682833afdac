"""Device client - adbutils calls moved off the event loop."""

from __future__ import annotations

import asyncio
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from adbutils import AdbClient, AdbDevice

logger = structlog.get_logger()

CHUNK_SIZE = 64 * 1024
REMOTE_TMP_DIR = "/data/local/tmp"


class ByteStream(Protocol):
    """Readable byte stream; an empty read signals completion."""

    async def read(self, size: int = CHUNK_SIZE) -> bytes: ...

    async def close(self) -> None: ...


class DeviceStream:
    """Async view over an adbutils stream connection."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection
        self._closed = False

    async def read(self, size: int = CHUNK_SIZE) -> bytes:
        if self._closed:
            return b""
        chunk = await asyncio.to_thread(self._connection.read, size)
        return bytes(chunk or b"")

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await asyncio.to_thread(self._connection.close)


async def read_all(stream: ByteStream) -> bytes:
    """Drain a stream into one buffer and close it."""
    buffer = bytearray()
    try:
        while True:
            chunk = await stream.read(CHUNK_SIZE)
            if not chunk:
                break
            buffer.extend(chunk)
    finally:
        await stream.close()
    return bytes(buffer)


class DeviceClient:
    """Shared handle on the adb server.

    Holds no per-request state; concurrent calls against the same
    device are not serialized.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 5037,
        adb: AdbClient | None = None,
    ) -> None:
        if adb is None:
            from adbutils import AdbClient

            adb = AdbClient(host=host, port=port)
        self._adb = adb

    async def list_devices(self) -> list[dict[str, str]]:
        """List connected devices as {id, type} records."""

        def _list() -> list[dict[str, str]]:
            return [{"id": info.serial, "type": info.state} for info in self._adb.list()]

        devices = await asyncio.to_thread(_list)
        logger.debug("devices_listed", count=len(devices))
        return devices

    async def shell(self, serial: str, command: str) -> DeviceStream:
        """Start a shell command and return its output stream."""
        device = self._device(serial)

        def _open() -> Any:
            return device.shell(command, stream=True)

        connection = await asyncio.to_thread(_open)
        return DeviceStream(connection)

    async def screencap(self, serial: str) -> DeviceStream:
        """Start a PNG screen capture and return its byte stream."""
        return await self.shell(serial, "screencap -p")

    async def install(self, serial: str, apk_path: str) -> None:
        """Push a local APK to the device and install it with pm."""
        device = self._device(serial)
        remote_path = posixpath.join(REMOTE_TMP_DIR, Path(apk_path).name)

        def _install() -> None:
            device.sync.push(apk_path, remote_path)
            device.install_remote(remote_path, clean=True)

        await asyncio.to_thread(_install)
        logger.info("apk_installed", serial=serial, apk_path=apk_path)

    def _device(self, serial: str) -> AdbDevice:
        return self._adb.device(serial)
