# utils/checks.py

import logging

import discord
from discord.ext import commands

from utils.errors import NotInGuild, RoleNotFound, Unauthorized

logger = logging.getLogger("utils.checks")


# ---------------- Resolvers ----------------
def resolve_guild(ctx: commands.Context) -> discord.Guild:
    """Guild the command was invoked in."""
    if ctx.guild is None:
        raise NotInGuild()
    return ctx.guild


def resolve_role(ctx: commands.Context, role_name: str, guild: discord.Guild | None = None) -> discord.Role:
    """First role in the guild's own order whose name is exactly role_name."""
    guild = guild or resolve_guild(ctx)
    for role in guild.roles:
        if role.name == role_name:
            return role
    raise RoleNotFound(role_name)


# ---------------- Authoritative snapshot ----------------
async def fetch_current_membership(bot: commands.Bot, guild_id: int, user_id: int) -> frozenset[int]:
    """
    Role ids the user holds right now, fetched over HTTP.
    The gateway cache is never consulted here: a stale member or guild object
    must not be able to grant access.
    """
    guild = await bot.fetch_guild(guild_id)
    try:
        member = await guild.fetch_member(user_id)
    except discord.NotFound:
        return frozenset()
    return frozenset(role.id for role in member.roles)


async def has_role(ctx: commands.Context, user: discord.abc.User, guild: discord.Guild, role: discord.Role) -> bool:
    role_ids = await fetch_current_membership(ctx.bot, guild.id, user.id)
    return role.id in role_ids


async def authorize(ctx: commands.Context, role_name: str) -> discord.Role:
    """Guild -> role -> fresh membership. Raises on every negative outcome."""
    guild = resolve_guild(ctx)
    role = resolve_role(ctx, role_name, guild)

    if not await has_role(ctx, ctx.author, guild, role):
        logger.info(f"Denied {ctx.command} for {ctx.author} ({ctx.author.id}) in guild {guild.id}")
        raise Unauthorized(ctx.author.id, role_name)
    return role


# ---------------- Checks ----------------
def mine_role_required():
    """Only members holding the configured Minecraft role get past this check."""
    async def predicate(ctx: commands.Context):
        await authorize(ctx, ctx.bot.config.mine_role)
        return True
    return commands.check(predicate)
