"""Tool registry - static catalog answered by list_tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ParameterType = Literal["string", "number"]


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: ParameterType
    description: str
    required: bool = False


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and parameter schema of one tool."""

    name: str
    description: str
    parameters: tuple[ParameterSpec, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-Schema-like tool entry."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": {
                    param.name: {"type": param.type, "description": param.description}
                    for param in self.parameters
                },
                "required": [param.name for param in self.parameters if param.required],
            },
        }


_DEVICE_ID = ParameterSpec(
    name="device_id",
    type="string",
    description="The ID of the Android device",
    required=True,
)

TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="list_devices",
        description="List all connected Android devices",
    ),
    ToolDescriptor(
        name="get_device_info",
        description="Get detailed information about a specific Android device",
        parameters=(_DEVICE_ID,),
    ),
    ToolDescriptor(
        name="take_screenshot",
        description="Take a screenshot of an Android device",
        parameters=(_DEVICE_ID,),
    ),
    ToolDescriptor(
        name="install_apk",
        description="Install an APK file on an Android device",
        parameters=(
            _DEVICE_ID,
            ParameterSpec(
                name="apk_path",
                type="string",
                description="The path to the APK file to install",
                required=True,
            ),
        ),
    ),
    ToolDescriptor(
        name="execute_shell_command",
        description="Execute a shell command on an Android device",
        parameters=(
            _DEVICE_ID,
            ParameterSpec(
                name="command",
                type="string",
                description="The shell command to execute",
                required=True,
            ),
        ),
    ),
    ToolDescriptor(
        name="get_logcat",
        description="Get logcat output from an Android device",
        parameters=(
            _DEVICE_ID,
            ParameterSpec(
                name="lines",
                type="number",
                description="Number of log lines to retrieve (default: 100)",
            ),
            ParameterSpec(
                name="filter",
                type="string",
                description='Filter string for logcat (e.g., "tag:MyApp")',
            ),
        ),
    ),
)


def list_tools() -> list[dict[str, Any]]:
    """Return every descriptor in registration order."""
    return [tool.to_dict() for tool in TOOLS]


def tool_names() -> list[str]:
    return [tool.name for tool in TOOLS]
