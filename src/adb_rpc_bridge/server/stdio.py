"""Stdio transport - newline-delimited records on stdin/stdout."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from typing import BinaryIO

import structlog

from adb_rpc_bridge.rpc.codec import LineFramer, encode_response
from adb_rpc_bridge.rpc.models import RpcResponse

logger = structlog.get_logger()

READ_CHUNK_SIZE = 64 * 1024


class StdoutWriter:
    """Writes each response as one line with a single write and flush."""

    def __init__(self, output: BinaryIO | None = None) -> None:
        self._output = output if output is not None else sys.stdout.buffer

    def send(self, response: RpcResponse) -> None:
        try:
            data = encode_response(response)
            self._output.write(data)
            self._output.flush()
        except (OSError, ValueError):
            logger.exception("response_write_failed", id=response.id)
            return
        logger.info(
            "response_sent",
            id=response.id,
            error=response.error.message if response.error else None,
        )


_feeders: set[asyncio.Task[None]] = set()


async def open_stdin_reader() -> asyncio.StreamReader:
    """Attach an asyncio reader to the process's stdin.

    Pipes, sockets and ttys are read by the event loop directly. A regular
    file redirected onto stdin cannot be, so it is read in a worker thread.
    """
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    try:
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    except ValueError:
        logger.info("stdin_not_a_pipe", fallback="thread")
        task = asyncio.create_task(feed_from_file(reader, sys.stdin.buffer))
        _feeders.add(task)
        task.add_done_callback(_feeders.discard)
    return reader


async def feed_from_file(reader: asyncio.StreamReader, source: BinaryIO) -> None:
    """Copy a blocking binary stream into `reader`, then signal EOF."""
    try:
        while True:
            chunk = await asyncio.to_thread(source.read, READ_CHUNK_SIZE)
            if not chunk:
                break
            reader.feed_data(chunk)
    except (OSError, ValueError):
        logger.exception("stdin_read_failed")
    finally:
        reader.feed_eof()


async def pump(
    reader: asyncio.StreamReader,
    on_record: Callable[[bytes], None],
    framer: LineFramer | None = None,
) -> None:
    """Feed chunks through the framer until EOF, handing out each record."""
    framer = framer or LineFramer()
    while True:
        chunk = await reader.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        for record in framer.feed(chunk):
            on_record(record)
    for record in framer.flush():
        on_record(record)
    logger.info("input_closed")
