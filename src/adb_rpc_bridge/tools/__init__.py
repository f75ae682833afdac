"""Tool catalog and handlers."""
