"""Standalone MCP servers for the Amap tools.

Each server is started as its own process (stdio MCP server) and shares the
tool registry with the HTTP gateway, so both surfaces return the same text.
"""
