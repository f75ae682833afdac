"""Wire codec - newline-delimited JSON records in and out."""

from __future__ import annotations

import json
from typing import Any

from adb_rpc_bridge.errors import BridgeError
from adb_rpc_bridge.rpc.models import RpcErrorObject, RpcRequest, RpcResponse


class MalformedMessageError(ValueError):
    """Inbound bytes that do not decode to a JSON object."""


def decode_message(raw: bytes | str) -> RpcRequest:
    """Parse one inbound record into a request envelope."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        data = json.loads(text)
    # Over-long integers raise a bare ValueError, deep nesting a RecursionError.
    except (ValueError, RecursionError) as exc:
        raise MalformedMessageError(str(exc)) from exc
    if not isinstance(data, dict):
        raise MalformedMessageError(f"expected a JSON object, got {type(data).__name__}")
    return RpcRequest.model_validate(data)


def result_response(request_id: Any, result: dict[str, Any]) -> RpcResponse:
    return RpcResponse(id=request_id, result=result)


def error_response(request_id: Any, error: BridgeError) -> RpcResponse:
    return RpcResponse(id=request_id, error=RpcErrorObject(**error.to_rpc()))


def encode_response(response: RpcResponse) -> bytes:
    """Serialize a response to a single newline-terminated line."""
    line = json.dumps(response.to_wire(), ensure_ascii=False, separators=(",", ":"))
    return (line + "\n").encode("utf-8")


class LineFramer:
    """Reassemble newline-delimited records from arbitrary chunks.

    Fragments are buffered until their newline arrives, and a chunk
    holding several records yields each of them.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, chunk: bytes) -> list[bytes]:
        self._buffer.extend(chunk)
        records: list[bytes] = []
        while True:
            index = self._buffer.find(b"\n")
            if index < 0:
                break
            line = bytes(self._buffer[:index]).strip()
            del self._buffer[: index + 1]
            if line:
                records.append(line)
        return records

    def flush(self) -> list[bytes]:
        """Return the trailing unterminated record, if any, at EOF."""
        line = bytes(self._buffer).strip()
        self._buffer.clear()
        return [line] if line else []

    @property
    def pending(self) -> int:
        return len(self._buffer)
