"""MCP server for Faultline."""
