"""HTTP client for an explorer endpoint serving recent block records."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import aiohttp

from .config import SourceConfig
from .codec import records_from_json
from .errors import ErrorCode, err
from .types import BlockRecord
from .view import validate_depth

logger = logging.getLogger(__name__)


class BlockSourceClient:
    """Fetches the last `depth` ranks of the DAG from one endpoint."""

    def __init__(self, config: SourceConfig):
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None

    async def connect(self) -> None:
        """Initialize HTTP session."""
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self.session = aiohttp.ClientSession(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "BlockSourceClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def fetch_blocks(self, depth: Optional[int] = None) -> List[BlockRecord]:
        """GET ``/blocks?depth=N`` and decode the ``blocks`` list."""
        depth = validate_depth(self.config.depth if depth is None else depth)
        if self.session is None:
            await self.connect()
        url = f"{self.config.endpoint.rstrip('/')}/blocks"
        try:
            async with self.session.get(url, params={"depth": str(depth)}) as resp:
                resp.raise_for_status()
                try:
                    data = await resp.json()
                except ValueError as e:
                    raise err(ErrorCode.SOURCE_BAD_RESPONSE, f"response is not JSON: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[{self.config.endpoint}] Fetch blocks failed: {e}")
            raise err(ErrorCode.SOURCE_UNAVAILABLE, str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("blocks"), list):
            raise err(ErrorCode.SOURCE_BAD_RESPONSE, "response has no blocks list")
        records = records_from_json(data["blocks"])
        logger.info(f"Fetched {len(records)} records from {self.config.endpoint}")
        return records
