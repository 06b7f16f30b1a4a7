"""MCP tools for the Fingertip sites, pages, blocks and themes API."""

__version__ = "1.0.0"
