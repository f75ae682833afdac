"""Artifact manager - screenshot files and logcat commands."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import structlog

from adb_rpc_bridge.device.client import DeviceClient
from adb_rpc_bridge.files.manager import FileManager

logger = structlog.get_logger()

DEFAULT_LOGCAT_LINES = 100


def iso_timestamp(now: datetime | None = None) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def screenshot_filename(device_id: str, now: datetime | None = None) -> str:
    """Filesystem-safe name: ':' and '.' in the timestamp become '-'."""
    timestamp = iso_timestamp(now).replace(":", "-").replace(".", "-")
    return f"screenshot-{device_id}-{timestamp}.png"


def build_logcat_command(
    lines: int | float = DEFAULT_LOGCAT_LINES, filter_text: str = ""
) -> str:
    """Dump the last `lines` log lines, optionally piped through grep -i.

    The filter is embedded in the command string as given.
    """
    command = f"logcat -d -v threadtime -t {lines}"
    if filter_text:
        command += f' | grep -i "{filter_text}"'
    return command


class ArtifactManager:
    """Manages screenshot capture and storage."""

    def __init__(self, output_dir: Path, files: FileManager | None = None) -> None:
        self.output_dir = output_dir
        self.files = files or FileManager()

    async def screenshot(
        self,
        client: DeviceClient,
        device_id: str,
        now: datetime | None = None,
    ) -> Path:
        """Capture a PNG from the device into the screenshots directory."""
        await self.files.ensure_dir(self.output_dir)

        filename = screenshot_filename(device_id, now)
        output_path = self.output_dir / filename

        stream = await client.screencap(device_id)
        size = await self.files.write_stream(output_path, stream)

        logger.info("screenshot_captured", path=str(output_path), size=size)
        return output_path
