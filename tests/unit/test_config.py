"""Tests for BridgeConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from adb_rpc_bridge.config import BridgeConfig


def test_defaults() -> None:
    config = BridgeConfig.from_env({})

    assert config.adb_host == "127.0.0.1"
    assert config.adb_port == 5037
    assert config.log_level == "info"
    assert config.screenshots_dir.name == "screenshots"


def test_reads_prefixed_environment(tmp_path: Path) -> None:
    config = BridgeConfig.from_env(
        {
            "ADB_RPC_BRIDGE_SCREENSHOTS_DIR": str(tmp_path),
            "ADB_RPC_BRIDGE_ADB_HOST": "10.0.0.2",
            "ADB_RPC_BRIDGE_ADB_PORT": "5038",
            "ADB_RPC_BRIDGE_LOG_LEVEL": "DEBUG",
        }
    )

    assert config.screenshots_dir == tmp_path
    assert config.adb_host == "10.0.0.2"
    assert config.adb_port == 5038
    assert config.log_level == "debug"


def test_rejects_bad_port() -> None:
    with pytest.raises(ValueError, match="ADB_PORT"):
        BridgeConfig.from_env({"ADB_RPC_BRIDGE_ADB_PORT": "abc"})


def test_overrides_skip_none(tmp_path: Path) -> None:
    config = BridgeConfig.from_env({}).with_overrides(
        adb_host=None, adb_port=6000, screenshots_dir=str(tmp_path)
    )

    assert config.adb_host == "127.0.0.1"
    assert config.adb_port == 6000
    assert config.screenshots_dir == tmp_path
