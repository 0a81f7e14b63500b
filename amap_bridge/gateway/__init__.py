"""Starlette application serving the Amap tools over MCP streamable HTTP."""
