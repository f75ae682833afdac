"""Error model - Actionable errors surfaced as JSON-RPC error objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Every failure category shares one wire code.
RPC_ERROR_CODE = -32000


@dataclass
class BridgeError(Exception):
    """
    Base error with context and remediation guidance.

    The wire only ever sees ``message``; code, context and remediation
    are kept for the diagnostic log.
    """

    code: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    remediation: str = ""

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "remediation": self.remediation,
        }

    def to_rpc(self) -> dict[str, Any]:
        """Convert to a JSON-RPC error object."""
        return {"code": RPC_ERROR_CODE, "message": self.message}


# Specific error constructors for common cases


def method_not_supported_error(method: Any) -> BridgeError:
    """Create error for an unknown method or envelope."""
    return BridgeError(
        code="ERR_METHOD_NOT_SUPPORTED",
        message="Method not supported",
        context={"method": method},
        remediation="Use initialize, list_tools or call_tool with jsonrpc '2.0'.",
    )


def unknown_tool_error(tool: Any) -> BridgeError:
    """Create error for a tool name with no handler."""
    return BridgeError(
        code="ERR_UNKNOWN_TOOL",
        message=f"Unknown tool: {tool}",
        context={"tool": tool},
        remediation="Call list_tools to see the available tool names.",
    )


def invalid_parameters_error(tool: str, fields: list[str]) -> BridgeError:
    """Create error for parameters that fail validation."""
    return BridgeError(
        code="ERR_INVALID_PARAMETERS",
        message=f"Invalid parameters for {tool}: {', '.join(fields)}",
        context={"tool": tool, "fields": fields},
        remediation="Check the tool's parameter schema with list_tools.",
    )


def apk_not_found_error(path: str) -> BridgeError:
    """Create error for a missing local APK."""
    return BridgeError(
        code="ERR_APK_NOT_FOUND",
        message=f"APK file not found at {path}",
        context={"path": path},
        remediation="Verify the local path and try again.",
    )


def device_command_error(serial: str, reason: str) -> BridgeError:
    """Wrap a device-communication failure, keeping its message."""
    return BridgeError(
        code="ERR_DEVICE_COMMAND",
        message=reason,
        context={"serial": serial},
        remediation="Check the device with list_devices and retry.",
    )


def internal_error(reason: str) -> BridgeError:
    """Create error for a failure that escaped a handler."""
    return BridgeError(
        code="ERR_INTERNAL",
        message=reason,
        context={},
        remediation="See the server log on stderr.",
    )
