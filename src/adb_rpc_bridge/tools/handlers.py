"""Tool handlers - one device/filesystem side-effect sequence per tool."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from adb_rpc_bridge.artifacts.manager import ArtifactManager, build_logcat_command
from adb_rpc_bridge.device.client import DeviceClient, read_all
from adb_rpc_bridge.device.props import parse_getprop, project_device_info
from adb_rpc_bridge.errors import (
    BridgeError,
    apk_not_found_error,
    device_command_error,
    invalid_parameters_error,
)
from adb_rpc_bridge.files.manager import FileManager
from adb_rpc_bridge.rpc.codec import error_response, result_response
from adb_rpc_bridge.rpc.models import (
    DeviceParams,
    InstallApkParams,
    ListDevicesParams,
    LogcatParams,
    RpcResponse,
    ShellCommandParams,
)

logger = structlog.get_logger()

ToolResult = dict[str, Any]
ToolHandler = Callable[[Any], Awaitable[ToolResult]]


def _decode(output: bytes) -> str:
    return output.decode("utf-8", errors="replace").strip()


def _serial_of(params: BaseModel) -> str:
    return str(getattr(params, "device_id", ""))


class ToolHandlers:
    """Binds tool names to handlers over the shared device client."""

    def __init__(
        self,
        client: DeviceClient,
        artifacts: ArtifactManager,
        files: FileManager | None = None,
    ) -> None:
        self.client = client
        self.artifacts = artifacts
        self.files = files or artifacts.files
        self._routes: dict[str, tuple[type[BaseModel], ToolHandler]] = {
            "list_devices": (ListDevicesParams, self.list_devices),
            "get_device_info": (DeviceParams, self.get_device_info),
            "take_screenshot": (DeviceParams, self.take_screenshot),
            "install_apk": (InstallApkParams, self.install_apk),
            "execute_shell_command": (ShellCommandParams, self.execute_shell_command),
            "get_logcat": (LogcatParams, self.get_logcat),
        }

    def names(self) -> list[str]:
        return list(self._routes)

    def has_tool(self, name: Any) -> bool:
        return isinstance(name, str) and name in self._routes

    async def call(self, name: str, request_id: Any, parameters: Any) -> RpcResponse:
        """Run one tool and return exactly one response.

        Every failure is turned into an error response here.
        """
        model, handler = self._routes[name]
        try:
            params = model.model_validate(parameters if parameters is not None else {})
        except ValidationError as exc:
            fields = [
                ".".join(str(part) for part in err["loc"]) or "parameters" for err in exc.errors()
            ]
            error = invalid_parameters_error(name, fields)
            logger.warning("tool_invalid_parameters", tool=name, id=request_id, fields=fields)
            return error_response(request_id, error)

        try:
            result = await handler(params)
        except BridgeError as exc:
            logger.warning("tool_failed", tool=name, id=request_id, **exc.to_dict())
            return error_response(request_id, exc)
        except Exception as exc:
            error = device_command_error(_serial_of(params), str(exc) or type(exc).__name__)
            logger.error("tool_failed", tool=name, id=request_id, exc_info=True, **error.to_dict())
            return error_response(request_id, error)

        logger.debug("tool_succeeded", tool=name, id=request_id)
        return result_response(request_id, result)

    async def list_devices(self, params: ListDevicesParams) -> ToolResult:
        logger.info("listing_devices")
        devices = await self.client.list_devices()
        logger.info("devices_found", count=len(devices))
        return {"devices": devices}

    async def get_device_info(self, params: DeviceParams) -> ToolResult:
        logger.info("getting_device_info", serial=params.device_id)
        stream = await self.client.shell(params.device_id, "getprop")
        output = _decode(await read_all(stream))
        props = parse_getprop(output)
        return {"deviceInfo": project_device_info(params.device_id, props)}

    async def take_screenshot(self, params: DeviceParams) -> ToolResult:
        logger.info("taking_screenshot", serial=params.device_id)
        path = await self.artifacts.screenshot(self.client, params.device_id)
        return {
            "success": True,
            "message": "Screenshot taken successfully",
            "path": str(path),
            "filename": path.name,
        }

    async def install_apk(self, params: InstallApkParams) -> ToolResult:
        logger.info("installing_apk", serial=params.device_id, apk_path=params.apk_path)
        if not await self.files.path_exists(params.apk_path):
            raise apk_not_found_error(params.apk_path)

        await self.client.install(params.device_id, params.apk_path)
        return {"success": True, "message": "App installed successfully"}

    async def execute_shell_command(self, params: ShellCommandParams) -> ToolResult:
        logger.info("executing_shell_command", serial=params.device_id, command=params.command)
        stream = await self.client.shell(params.device_id, params.command)
        output = await read_all(stream)
        return {"success": True, "output": _decode(output)}

    async def get_logcat(self, params: LogcatParams) -> ToolResult:
        logger.info(
            "getting_logcat", serial=params.device_id, lines=params.lines, filter=params.filter
        )
        command = build_logcat_command(params.lines, params.filter)
        stream = await self.client.shell(params.device_id, command)
        output = await read_all(stream)
        return {"success": True, "logs": _decode(output)}
