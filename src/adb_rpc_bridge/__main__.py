"""Allow `python -m adb_rpc_bridge`."""

from adb_rpc_bridge.cli.main import app

if __name__ == "__main__":
    app()
