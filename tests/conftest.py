"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import io
import json
from pathlib import Path
from typing import Any

import pytest

from adb_rpc_bridge.config import BridgeConfig

SAMPLE_GETPROP = b"""[ro.product.model]: [Pixel7]
[ro.product.manufacturer]: [Google]
[ro.product.brand]: [google]
[ro.build.version.release]: [14]
[ro.build.version.sdk]: [34]
[persist.sys.timezone]: [Europe/Berlin]
"""


class FakeStream:
    """In-memory byte stream handing out fixed chunks."""

    def __init__(self, chunks: list[bytes] | bytes = b"", fail_after: int | None = None) -> None:
        self._chunks = [chunks] if isinstance(chunks, bytes) else list(chunks)
        self._fail_after = fail_after
        self.reads = 0
        self.closed = False

    async def read(self, size: int = 65536) -> bytes:
        if self._fail_after is not None and self.reads >= self._fail_after:
            raise OSError("stream reset by device")
        self.reads += 1
        if not self._chunks:
            return b""
        return self._chunks.pop(0)

    async def close(self) -> None:
        self.closed = True


class FakeDeviceClient:
    """Records calls and answers from canned data."""

    def __init__(self) -> None:
        self.devices: list[dict[str, str]] = [{"id": "emulator-5554", "type": "device"}]
        self.shell_outputs: dict[str, bytes] = {}
        self.screencap_bytes = b"\x89PNG\r\n\x1a\nfake"
        self.shell_calls: list[tuple[str, str]] = []
        self.install_calls: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None
        self.delays: dict[str, float] = {}

    async def _maybe_fail(self, serial: str | None = None) -> None:
        if serial is not None and serial in self.delays:
            await asyncio.sleep(self.delays[serial])
        if self.fail_with is not None:
            raise self.fail_with

    async def list_devices(self) -> list[dict[str, str]]:
        await self._maybe_fail()
        return self.devices

    async def shell(self, serial: str, command: str) -> FakeStream:
        self.shell_calls.append((serial, command))
        await self._maybe_fail(serial)
        return FakeStream(self.shell_outputs.get(command, b""))

    async def screencap(self, serial: str) -> FakeStream:
        await self._maybe_fail(serial)
        data = self.screencap_bytes
        return FakeStream([data[:4], data[4:]])

    async def install(self, serial: str, apk_path: str) -> None:
        self.install_calls.append((serial, apk_path))
        await self._maybe_fail(serial)


@pytest.fixture
def fake_client() -> FakeDeviceClient:
    return FakeDeviceClient()


@pytest.fixture
def config(tmp_path: Path) -> BridgeConfig:
    return BridgeConfig(screenshots_dir=tmp_path / "screenshots")


@pytest.fixture
def output() -> io.BytesIO:
    return io.BytesIO()


def read_responses(buffer: io.BytesIO) -> list[dict[str, Any]]:
    """Decode every newline-delimited response written so far."""
    return [json.loads(line) for line in buffer.getvalue().decode().splitlines() if line]


def request_line(method: str, request_id: Any = 1, **params: Any) -> bytes:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params:
        message["params"] = params
    return json.dumps(message).encode()


@pytest.fixture
def make_request() -> Any:
    return request_line


@pytest.fixture
def responses_of() -> Any:
    return read_responses


@pytest.fixture
def stream_factory() -> type[FakeStream]:
    return FakeStream


@pytest.fixture
def sample_getprop() -> bytes:
    return SAMPLE_GETPROP
