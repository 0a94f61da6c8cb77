import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional

from utils.errors import send_reply


def account_created_message(user: discord.abc.User) -> str:
    created = user.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")
    return f"{user.name}'s account was created at {created}"


class Age(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.hybrid_command(name="age", description="Displays your or another user's account creation date")
    @app_commands.describe(user="Selected user")
    async def age(self, ctx: commands.Context, user: Optional[discord.User] = None):
        target = user or ctx.author
        await send_reply(ctx, account_created_message(target))


async def setup(bot: commands.Bot):
    await bot.add_cog(Age(bot))
