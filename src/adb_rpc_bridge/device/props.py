"""getprop parsing and the device info projection."""

from __future__ import annotations

import re

UNKNOWN = "Unknown"

_PROP_LINE_RE = re.compile(r"\[(.*?)\]: \[(.*?)\]")

# deviceInfo field -> source property
_PROJECTION = {
    "model": "ro.product.model",
    "manufacturer": "ro.product.manufacturer",
    "brand": "ro.product.brand",
    "androidVersion": "ro.build.version.release",
    "sdkVersion": "ro.build.version.sdk",
}


def parse_getprop(output: str) -> dict[str, str]:
    """Parse `[key]: [value]` lines; anything else is ignored."""
    return {match.group(1): match.group(2) for match in _PROP_LINE_RE.finditer(output)}


def project_device_info(device_id: str, props: dict[str, str]) -> dict[str, str]:
    """Build deviceInfo from parsed properties.

    Empty or missing properties read as Unknown; the serial number
    falls back to the device id.
    """
    info = {"id": device_id}
    for field_name, prop in _PROJECTION.items():
        info[field_name] = props.get(prop) or UNKNOWN
    info["serialNumber"] = props.get("ro.serialno") or device_id
    return info
