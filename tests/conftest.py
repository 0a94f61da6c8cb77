from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import aiohttp
import discord
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from utils.config import BotConfig


def make_role(role_id: int, name: str):
    return SimpleNamespace(id=role_id, name=name)


def make_user(user_id: int = 10, name: str = "steve", created_at: datetime | None = None):
    return SimpleNamespace(
        id=user_id,
        name=name,
        created_at=created_at or datetime(2016, 5, 1, 12, 30, 15, tzinfo=timezone.utc),
    )


def make_bot(member_role_ids=(), *, api_url: str = "http://ctl.local", member_missing: bool = False):
    """Bot whose HTTP fetches return a member holding member_role_ids."""
    snapshot = SimpleNamespace(id=1)
    if member_missing:
        snapshot.fetch_member = AsyncMock(
            side_effect=discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), "Unknown Member")
        )
    else:
        member = SimpleNamespace(roles=[make_role(rid, f"role-{rid}") for rid in member_role_ids])
        snapshot.fetch_member = AsyncMock(return_value=member)

    return SimpleNamespace(
        config=BotConfig(token="token", api_url=api_url),
        fetch_guild=AsyncMock(return_value=snapshot),
        guild_snapshot=snapshot,
    )


def make_ctx(bot, *, guild=..., author=None, command: str = "mine_restart"):
    if guild is ...:
        guild = SimpleNamespace(id=1, roles=[make_role(100, "@everyone"), make_role(200, "testing")])
    return SimpleNamespace(
        bot=bot,
        guild=guild,
        author=author or make_user(),
        command=command,
        send=AsyncMock(),
        defer=AsyncMock(),
    )


def sent(ctx) -> list[str]:
    return [call.args[0] for call in ctx.send.await_args_list]


class ControlServer:
    """Stand-in for the container control API; records every request."""

    def __init__(self):
        self.requests: list[str] = []
        self.bodies = {"/restart": "restarting...", "/healthcheck": "healthy"}
        self.status = 200
        self.base_url = ""
        self.app = web.Application()
        self.app.router.add_get("/restart", self._handle)
        self.app.router.add_get("/healthcheck", self._handle)

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.path_qs)
        return web.Response(text=self.bodies[request.path], status=self.status)


@pytest_asyncio.fixture
async def control_server():
    server = ControlServer()
    async with TestServer(server.app) as ts:
        server.base_url = f"http://{ts.host}:{ts.port}"
        yield server


@pytest_asyncio.fixture
async def http_session():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def user():
    return make_user()
