"""MCP server for Google Calendar events and Google Tasks."""
