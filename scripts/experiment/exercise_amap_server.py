"""
Small experiment script to exercise the Amap stdio MCP server end to end.

Needs a real key; every call goes to the live Amap API.

Usage:
    AMAP_MAPS_API_KEY=... python scripts/experiment/exercise_amap_server.py
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

# Ensure the project root is on sys.path so we can import amap_bridge.*
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from amap_bridge.common.mcp_client import AmapStdioClient


async def main() -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))

    async with AmapStdioClient(env=env) as client:
        print("=== Available MCP tools ===")
        print(client.list_tools())

        print("\n=== geocode(北京市朝阳区阜通东大街6号) ===")
        print(await client.call_tool("geocode", {"address": "北京市朝阳区阜通东大街6号"}))

        print("\n=== reverse_geocode(116.481488, 39.990464) ===")
        print(await client.call_tool("reverse_geocode", {"longitude": 116.481488, "latitude": 39.990464}))

        print("\n=== poi_search(咖啡, 北京) ===")
        print(await client.call_tool("poi_search", {"keywords": "咖啡", "city": "北京", "offset": 5}))

        print("\n=== route_planning ===")
        print(
            await client.call_tool(
                "route_planning",
                {"origin": "116.481028,39.989643", "destination": "116.434446,39.90816"},
            )
        )

        print("\n=== weather_query(杭州) ===")
        print(await client.call_tool("weather_query", {"city": "杭州"}))


if __name__ == "__main__":
    asyncio.run(main())
