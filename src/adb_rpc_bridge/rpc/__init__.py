"""JSON-RPC envelope models and wire codec."""
