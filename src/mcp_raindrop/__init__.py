"""MCP server for Raindrop.io bookmarks."""

__version__ = "0.1.0"
