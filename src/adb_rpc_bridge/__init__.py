"""adb-rpc-bridge - ADB tools over a newline-delimited JSON-RPC stdio stream."""

__version__ = "0.1.0"
