"""File manager - local filesystem side of the tools."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from adb_rpc_bridge.device.client import CHUNK_SIZE, ByteStream

logger = structlog.get_logger()


class FileManager:
    """Directory creation, existence checks and stream-to-file writes."""

    async def ensure_dir(self, path: Path) -> Path:
        """Create a directory if absent; an existing one is fine."""
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        return path

    async def path_exists(self, path: str | Path) -> bool:
        return await asyncio.to_thread(Path(path).expanduser().exists)

    async def write_stream(self, path: Path, stream: ByteStream) -> int:
        """Copy a stream to a file until it ends; returns bytes written.

        A partially written file is left in place on failure.
        """
        handle = await asyncio.to_thread(path.open, "wb")
        written = 0
        try:
            while True:
                chunk = await stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                await asyncio.to_thread(handle.write, chunk)
                written += len(chunk)
        finally:
            await asyncio.to_thread(handle.close)
            await stream.close()
        logger.debug("stream_written", path=str(path), size=written)
        return written
