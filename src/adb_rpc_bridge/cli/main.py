"""CLI entry point using Typer."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer

from adb_rpc_bridge.config import BridgeConfig
from adb_rpc_bridge.log import configure_logging

app = typer.Typer(
    name="adb-rpc-bridge",
    help="ADB tools over a newline-delimited JSON-RPC stdio stream",
    no_args_is_help=True,
)


@app.command()
def version() -> None:
    """Show version information."""
    from adb_rpc_bridge import __version__

    typer.echo(f"adb-rpc-bridge v{__version__}")


@app.command()
def tools() -> None:
    """Print the tool catalog as JSON."""
    from adb_rpc_bridge.tools.registry import list_tools

    typer.echo(json.dumps({"tools": list_tools()}, indent=2, ensure_ascii=True))


@app.command()
def serve(
    screenshots_dir: Path | None = typer.Option(
        None, "--screenshots-dir", help="Directory for captured screenshots"
    ),
    adb_host: str | None = typer.Option(None, "--adb-host", help="adb server host"),
    adb_port: int | None = typer.Option(None, "--adb-port", help="adb server port"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="debug, info, warning or error"
    ),
) -> None:
    """Serve JSON-RPC requests on stdin/stdout until EOF."""
    try:
        config = BridgeConfig.from_env().with_overrides(
            screenshots_dir=screenshots_dir,
            adb_host=adb_host,
            adb_port=adb_port,
            log_level=log_level,
        )
        configure_logging(config.log_level)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc

    from adb_rpc_bridge.server.core import BridgeCore

    asyncio.run(BridgeCore(config).serve())


if __name__ == "__main__":
    app()
