# utils/errors.py

import discord
from discord import app_commands
from discord.ext import commands

GENERIC_ERROR_MESSAGE = "Something went wrong while running this command"


class MineBotError(commands.CommandError):
    """Base for every error the bot knows how to explain to the user."""

    user_message: str | None = None

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message or self.__class__.__name__)


# ---------------- Authorization (raised from checks) ----------------
class NotInGuild(MineBotError, commands.CheckFailure):
    user_message = "You are not a member of this server"


class RoleNotFound(MineBotError, commands.CheckFailure):
    user_message = "The Minecraft role does not exist"

    def __init__(self, role_name: str):
        self.role_name = role_name
        super().__init__(f"role {role_name!r} not found")


class Unauthorized(MineBotError, commands.CheckFailure):
    user_message = "You do not have the Minecraft role"

    def __init__(self, user_id: int, role_name: str):
        self.user_id = user_id
        self.role_name = role_name
        super().__init__(f"user {user_id} does not hold role {role_name!r}")


# ---------------- Runtime ----------------
class ExternalRequestFailed(MineBotError):
    user_message = "Could not reach the Minecraft control API"

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"GET {url} failed: {reason}")


class ReplyChannelFailed(MineBotError):
    """Discord rejected the reply. Nothing can be sent back, so it is only logged."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"could not send reply: {reason}")


def unwrap_error(error: Exception) -> Exception:
    """Strip CommandInvokeError / HybridCommandError / app command wrappers."""
    seen = set()
    while id(error) not in seen:
        seen.add(id(error))
        if isinstance(error, (commands.CommandInvokeError, commands.HybridCommandError,
                              app_commands.CommandInvokeError)):
            error = error.original
        else:
            break
    return error


def user_message(error: Exception) -> str | None:
    """The single reply to send for a failed invocation, or None when no reply is possible."""
    error = unwrap_error(error)
    if isinstance(error, ReplyChannelFailed):
        return None
    if isinstance(error, MineBotError):
        return error.user_message
    if isinstance(error, discord.Forbidden):
        return "I don't have permission to do that here"
    return GENERIC_ERROR_MESSAGE


async def send_reply(ctx: commands.Context, content: str) -> discord.Message:
    """ctx.send, with Discord refusing the message surfaced as ReplyChannelFailed."""
    try:
        return await ctx.send(content)
    except discord.HTTPException as e:
        raise ReplyChannelFailed(str(e)) from e
