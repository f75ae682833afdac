"""Dispatcher - routes parsed messages and schedules tool calls."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

from adb_rpc_bridge.errors import internal_error, method_not_supported_error, unknown_tool_error
from adb_rpc_bridge.rpc.codec import (
    MalformedMessageError,
    decode_message,
    error_response,
    result_response,
)
from adb_rpc_bridge.rpc.models import PROTOCOL_TAG, RpcRequest, RpcResponse
from adb_rpc_bridge.tools.handlers import ToolHandlers
from adb_rpc_bridge.tools.registry import list_tools

logger = structlog.get_logger()

Sender = Callable[[RpcResponse], None]


class Dispatcher:
    """Turns inbound records into responses.

    Routing happens in arrival order; each tool call then runs as its
    own task, so responses may be sent out of order.
    """

    def __init__(self, handlers: ToolHandlers, send: Sender) -> None:
        self.handlers = handlers
        self._send = send
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def handle_message(self, raw: bytes | str) -> None:
        """Parse and route one record. Unparseable input gets no response."""
        try:
            request = decode_message(raw)
        except MalformedMessageError as exc:
            logger.warning("message_malformed", error=str(exc))
            return

        logger.info("message_received", id=request.id, method=request.method)

        if request.is_v2 and request.method == "initialize":
            self._send(result_response(request.id, {"version": PROTOCOL_TAG, "capabilities": {}}))
        elif request.is_v2 and request.method == "list_tools":
            self._send(result_response(request.id, {"tools": list_tools()}))
        elif request.is_v2 and request.method == "call_tool":
            self._call_tool(request)
        else:
            logger.warning("message_unsupported", id=request.id, method=request.method)
            if request.has_id:
                self._send(error_response(request.id, method_not_supported_error(request.method)))

    def _call_tool(self, request: RpcRequest) -> None:
        params = request.params if isinstance(request.params, dict) else {}
        tool = params.get("tool")
        parameters = params.get("parameters")
        logger.info("tool_call", id=request.id, tool=tool)

        if not self.handlers.has_tool(tool):
            self._send_error(error_response(request.id, unknown_tool_error(tool)))
            return

        task = asyncio.create_task(self._run_tool(tool, request.id, parameters))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_tool(self, tool: str, request_id: Any, parameters: Any) -> None:
        try:
            response = await self.handlers.call(tool, request_id, parameters)
        except Exception as exc:
            logger.exception("tool_crashed", tool=tool, id=request_id)
            response = error_response(request_id, internal_error(str(exc) or type(exc).__name__))
        if response.error is not None:
            self._send_error(response)
        else:
            self._send(response)

    def _send_error(self, response: RpcResponse) -> None:
        """Error responses go out only when the request carried an id."""
        if response.id is None:
            logger.warning(
                "error_response_dropped",
                reason="missing id",
                error=response.error.message if response.error else None,
            )
            return
        self._send(response)

    async def drain(self) -> None:
        """Wait for every in-flight tool call to answer."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
