"""HTTP transport for the clipboard service."""
