"""Tests for ArtifactManager and its naming/command helpers."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from adb_rpc_bridge.artifacts.manager import (
    ArtifactManager,
    build_logcat_command,
    iso_timestamp,
    screenshot_filename,
)

FIXED_NOW = datetime(2024, 5, 1, 10, 20, 30, 123456, tzinfo=UTC)


def test_iso_timestamp_matches_utc_millis() -> None:
    assert iso_timestamp(FIXED_NOW) == "2024-05-01T10:20:30.123Z"


def test_screenshot_filename_is_filesystem_safe() -> None:
    filename = screenshot_filename("emulator-5554", FIXED_NOW)

    assert filename == "screenshot-emulator-5554-2024-05-01T10-20-30-123Z.png"
    assert ":" not in filename


def test_screenshot_filename_pattern_for_current_time() -> None:
    filename = screenshot_filename("R58M123")
    assert re.fullmatch(
        r"screenshot-R58M123-\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{3}Z\.png", filename
    )


class TestLogcatCommand:
    def test_defaults(self) -> None:
        assert build_logcat_command() == "logcat -d -v threadtime -t 100"

    def test_lines_and_filter(self) -> None:
        command = build_logcat_command(20, "ActivityManager")
        assert command == 'logcat -d -v threadtime -t 20 | grep -i "ActivityManager"'

    def test_empty_filter_adds_no_pipe(self) -> None:
        assert "|" not in build_logcat_command(5, "")


@pytest.mark.asyncio
async def test_screenshot_streams_capture_to_file(
    tmp_path: Path, fake_client: Any
) -> None:
    manager = ArtifactManager(output_dir=tmp_path / "shots")

    path = await manager.screenshot(fake_client, "emulator-5554", now=FIXED_NOW)

    assert path == tmp_path / "shots" / "screenshot-emulator-5554-2024-05-01T10-20-30-123Z.png"
    assert path.read_bytes() == fake_client.screencap_bytes


@pytest.mark.asyncio
async def test_screenshot_propagates_capture_failure(tmp_path: Path, fake_client: Any) -> None:
    fake_client.fail_with = RuntimeError("device 'emulator-5554' not found")
    manager = ArtifactManager(output_dir=tmp_path / "shots")

    with pytest.raises(RuntimeError, match="not found"):
        await manager.screenshot(fake_client, "emulator-5554")

    assert (tmp_path / "shots").is_dir()
