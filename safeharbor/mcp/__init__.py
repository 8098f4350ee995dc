"""MCP server exposing the estimated tax calculation as tools."""
