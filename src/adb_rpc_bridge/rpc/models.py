"""Pydantic models for the JSON-RPC envelope and per-tool parameters."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

PROTOCOL_TAG = "2.0"


class RpcRequest(BaseModel):
    """One inbound message. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: Any = None
    id: Any = None
    method: Any = None
    params: Any = None

    @property
    def has_id(self) -> bool:
        return self.id is not None

    @property
    def is_v2(self) -> bool:
        return self.jsonrpc == PROTOCOL_TAG


class RpcErrorObject(BaseModel):
    code: int
    message: str


class RpcResponse(BaseModel):
    """One outbound message carrying either a result or an error."""

    jsonrpc: str = PROTOCOL_TAG
    id: Any = None
    result: dict[str, Any] | None = None
    error: RpcErrorObject | None = None

    @model_validator(mode="after")
    def exactly_one_payload(self) -> RpcResponse:
        """A response carries a result or an error, never both or neither."""
        if (self.result is None) == (self.error is None):
            raise ValueError("response must carry exactly one of result or error")
        return self

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump()
        else:
            payload["result"] = self.result
        return payload


# Tool parameters, one model per tool shape


class ListDevicesParams(BaseModel):
    pass


class DeviceParams(BaseModel):
    device_id: str


class InstallApkParams(BaseModel):
    device_id: str
    apk_path: str


class ShellCommandParams(BaseModel):
    device_id: str
    command: str


class LogcatParams(BaseModel):
    device_id: str
    # Any JSON number, passed through to `logcat -t` as given.
    lines: int | float = 100
    filter: str = ""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls for optional fields as absent."""
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (key in {"lines", "filter"} and value is None)
            }
        return data
