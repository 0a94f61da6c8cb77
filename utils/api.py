import asyncio
import logging

import aiohttp

from utils.config import MINE_CONTAINER
from utils.errors import ExternalRequestFailed

logger = logging.getLogger("utils.api")


class MineControlAPI:
    """Thin client for the container control API hosting the Minecraft server."""

    def __init__(self, session: aiohttp.ClientSession, base_url: str, container: str = MINE_CONTAINER):
        self.session = session
        self.base = base_url.rstrip("/")
        self.container = container

    def build_url(self, action: str) -> str:
        return f"{self.base}/{action}?container={self.container}"

    async def _fetch(self, action: str) -> str:
        """Internal request handler, returns the body untouched"""
        url = self.build_url(action)
        logger.info(f"GET {url}")
        try:
            async with self.session.get(url) as resp:
                body = await resp.text()
                logger.info(f"GET {url} -> {resp.status} ({len(body)} chars)")
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            raise ExternalRequestFailed(url, str(e) or e.__class__.__name__) from e

    async def restart(self) -> str:
        return await self._fetch("restart")

    async def healthcheck(self) -> str:
        return await self._fetch("healthcheck")
