"""Tests for getprop parsing and device info projection."""

from __future__ import annotations

from adb_rpc_bridge.device.props import UNKNOWN, parse_getprop, project_device_info


def test_parse_getprop_ignores_other_lines() -> None:
    output = "[ro.product.model]: [Pixel7]\ngarbage line\n[ro.empty]: []\n"

    assert parse_getprop(output) == {"ro.product.model": "Pixel7", "ro.empty": ""}


def test_projection_defaults_to_unknown() -> None:
    info = project_device_info("emulator-5554", {"ro.product.model": "Pixel7"})

    assert info == {
        "id": "emulator-5554",
        "model": "Pixel7",
        "manufacturer": UNKNOWN,
        "brand": UNKNOWN,
        "androidVersion": UNKNOWN,
        "sdkVersion": UNKNOWN,
        "serialNumber": "emulator-5554",
    }


def test_projection_prefers_reported_serial() -> None:
    info = project_device_info("192.168.1.5:5555", {"ro.serialno": "R58M123"})
    assert info["serialNumber"] == "R58M123"
