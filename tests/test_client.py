"""Block source client against a local aiohttp server."""

from __future__ import annotations

import asyncio
import socket

import pytest
from aiohttp import web

from blockdag_layout.client import BlockSourceClient
from blockdag_layout.config import SourceConfig
from blockdag_layout.errors import ErrorCode, LayoutError

BLOCKS = [
    {"block_hash": "a", "validator": "v1", "rank": 0},
    {"block_hash": "b", "validator": "v1", "rank": 1, "parent_hashes": ["a"], "message_type": "ballot"},
]


def _free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


async def _serve(handler, call):
    app = web.Application()
    app.router.add_get("/blocks", handler)
    runner = web.AppRunner(app)
    await runner.setup()
    port = _free_port()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        return await call(f"http://127.0.0.1:{port}")
    finally:
        await runner.cleanup()


def test_fetch_blocks() -> None:
    seen = {}

    async def handler(request: web.Request) -> web.Response:
        seen["depth"] = request.query.get("depth")
        return web.json_response({"blocks": BLOCKS})

    async def call(endpoint: str):
        async with BlockSourceClient(SourceConfig(endpoint=endpoint, timeout=5)) as client:
            return await client.fetch_blocks(20)

    records = asyncio.run(_serve(handler, call))
    assert [r.block_hash for r in records] == ["a", "b"]
    assert records[1].is_ballot
    assert seen["depth"] == "20"


def test_fetch_blocks_bad_payload() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.json_response({"items": []})

    async def call(endpoint: str):
        async with BlockSourceClient(SourceConfig(endpoint=endpoint, timeout=5)) as client:
            return await client.fetch_blocks()

    with pytest.raises(LayoutError) as exc_info:
        asyncio.run(_serve(handler, call))
    assert exc_info.value.code == ErrorCode.SOURCE_BAD_RESPONSE


def test_fetch_blocks_http_error() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=503)

    async def call(endpoint: str):
        async with BlockSourceClient(SourceConfig(endpoint=endpoint, timeout=5)) as client:
            return await client.fetch_blocks()

    with pytest.raises(LayoutError) as exc_info:
        asyncio.run(_serve(handler, call))
    assert exc_info.value.code == ErrorCode.SOURCE_UNAVAILABLE


def test_fetch_blocks_unreachable() -> None:
    endpoint = f"http://127.0.0.1:{_free_port()}"

    async def call():
        async with BlockSourceClient(SourceConfig(endpoint=endpoint, timeout=5)) as client:
            return await client.fetch_blocks()

    with pytest.raises(LayoutError) as exc_info:
        asyncio.run(call())
    assert exc_info.value.code == ErrorCode.SOURCE_UNAVAILABLE


def test_fetch_blocks_invalid_depth() -> None:
    async def call():
        client = BlockSourceClient(SourceConfig(endpoint="http://127.0.0.1:1"))
        try:
            return await client.fetch_blocks(7)
        finally:
            await client.close()

    with pytest.raises(LayoutError) as exc_info:
        asyncio.run(call())
    assert exc_info.value.code == ErrorCode.INVALID_DEPTH


def test_fetch_blocks_malformed_json() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(text="{not json", content_type="application/json")

    async def call(endpoint: str):
        async with BlockSourceClient(SourceConfig(endpoint=endpoint, timeout=5)) as client:
            return await client.fetch_blocks()

    with pytest.raises(LayoutError) as exc_info:
        asyncio.run(_serve(handler, call))
    assert exc_info.value.code == ErrorCode.SOURCE_BAD_RESPONSE
