"""Dispatch loop and stdio transport."""
