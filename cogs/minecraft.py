import logging

from discord.ext import commands

from utils.api import MineControlAPI
from utils.checks import mine_role_required
from utils.errors import send_reply

logger = logging.getLogger("cogs.minecraft")


class MineControl(commands.Cog):
    """Restart and health-check the hosted Minecraft server."""

    def __init__(self, bot: commands.Bot, api: MineControlAPI | None = None):
        self.bot = bot
        self.api = api or MineControlAPI(bot.http_session, bot.config.api_url, bot.config.mine_container)

    @commands.hybrid_command(name="mine_restart", description="Restart the Minecraft server")
    @mine_role_required()
    async def mine_restart(self, ctx: commands.Context):
        await ctx.defer()
        body = await self.api.restart()
        logger.info(f"mine_restart by {ctx.author} ({ctx.author.id})")
        await send_reply(ctx, body)

    @commands.hybrid_command(name="mine_healthcheck", description="Check the Minecraft server's health")
    @mine_role_required()
    async def mine_healthcheck(self, ctx: commands.Context):
        await ctx.defer()
        body = await self.api.healthcheck()
        await send_reply(ctx, body)


async def setup(bot: commands.Bot):
    await bot.add_cog(MineControl(bot))
