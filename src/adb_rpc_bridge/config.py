"""Runtime configuration read from ADB_RPC_BRIDGE_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

ENV_PREFIX = "ADB_RPC_BRIDGE_"
DEFAULT_STATE_DIR = Path.home() / ".adb-rpc-bridge"


@dataclass(frozen=True)
class BridgeConfig:
    """Settings shared by the server and its collaborators."""

    screenshots_dir: Path = field(default_factory=lambda: DEFAULT_STATE_DIR / "screenshots")
    adb_host: str = "127.0.0.1"
    adb_port: int = 5037
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> BridgeConfig:
        """Build config from the environment, falling back to defaults."""
        env = os.environ if environ is None else environ
        config = cls()

        screenshots_dir = env.get(f"{ENV_PREFIX}SCREENSHOTS_DIR")
        if screenshots_dir:
            config = replace(config, screenshots_dir=Path(screenshots_dir).expanduser())

        adb_host = env.get(f"{ENV_PREFIX}ADB_HOST")
        if adb_host:
            config = replace(config, adb_host=adb_host)

        adb_port = env.get(f"{ENV_PREFIX}ADB_PORT")
        if adb_port:
            try:
                config = replace(config, adb_port=int(adb_port))
            except ValueError as err:
                raise ValueError(f"Invalid {ENV_PREFIX}ADB_PORT: {adb_port}") from err

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            config = replace(config, log_level=log_level.lower())

        return config

    def with_overrides(self, **overrides: Any) -> BridgeConfig:
        """Return a copy with the non-None overrides applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        if "screenshots_dir" in values:
            values["screenshots_dir"] = Path(values["screenshots_dir"]).expanduser()
        return replace(self, **values)
