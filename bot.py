import os
import sys
import logging
import aiohttp
import discord
from discord.ext import commands
from datetime import datetime, timezone

from utils.config import BotConfig, ConfigError, load_config
from utils.errors import ReplyChannelFailed, unwrap_error, user_message, send_reply

COGS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "cogs")

logger = logging.getLogger("bot")


def build_intents(config: BotConfig) -> discord.Intents:
    intents = discord.Intents.default()
    # Privileged; without it prefix commands only work when the bot is mentioned.
    intents.message_content = config.message_content
    return intents


class MineBot(commands.Bot):
    def __init__(self, config: BotConfig):
        super().__init__(
            command_prefix=commands.when_mentioned_or(config.command_prefix),
            intents=build_intents(config),
            help_command=None,
        )
        self.config = config
        self.http_session: aiohttp.ClientSession | None = None
        self.start_time: datetime | None = None

    async def setup_hook(self):
        self.http_session = aiohttp.ClientSession()
        logger.info("✅ aiohttp session started")

        await self.load_cogs()
        # Runs once per process; on_ready fires again on every reconnect.
        await self.sync_commands()

    async def load_cogs(self):
        for filename in sorted(os.listdir(COGS_DIR)):
            if filename.endswith(".py") and not filename.startswith("__"):
                await self.load_extension(f"cogs.{filename[:-3]}")
                logger.info(f"✅ Loaded cog: {filename}")

    async def sync_commands(self):
        try:
            synced = await self.tree.sync()
            logger.info(f"✅ Synced {len(synced)} slash commands globally")
            if self.config.guild_id:
                guild = discord.Object(id=self.config.guild_id)
                self.tree.copy_global_to(guild=guild)
                await self.tree.sync(guild=guild)
                logger.info(f"✅ Synced slash commands to guild {self.config.guild_id}")
        except discord.HTTPException as e:
            logger.warning(f"⚠️ Failed to sync slash commands: {e}")

    async def close(self):
        if self.http_session and not self.http_session.closed:
            await self.http_session.close()
            logger.info("✅ aiohttp session closed")
        await super().close()

    async def on_ready(self):
        if self.start_time is None:
            self.start_time = datetime.now(timezone.utc)

        logger.info(f"✅ {self.user} is online.")
        logger.info("─────────────────────────────────────────────")

    # ───────────── Command Error Handling ─────────────
    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError):
        """The one place a failed invocation is turned into a reply."""
        if isinstance(error, commands.CommandNotFound):
            return

        original = unwrap_error(error)
        if isinstance(original, ReplyChannelFailed):
            logger.error(f"❌ /{ctx.command} could not reply to {ctx.author}: {original.reason}")
            return

        if isinstance(original, commands.CheckFailure):
            logger.info(f"/{ctx.command} rejected for {ctx.author}: {original}")
        else:
            logger.error(f"❌ /{ctx.command} failed for {ctx.author}", exc_info=original)

        message = user_message(original)
        if message is None:
            return
        try:
            await send_reply(ctx, message)
        except ReplyChannelFailed as e:
            logger.error(f"❌ /{ctx.command} could not send error reply: {e.reason}")


def main():
    try:
        config = load_config()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"❌ {e} (set it in the environment or .env)")
        sys.exit(1)

    # ───────────── Logging ─────────────
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

    bot = MineBot(config)

    if config.keep_alive_port:
        from web import keep_alive
        keep_alive(bot, config.keep_alive_port)

    bot.run(config.token, log_handler=None)


if __name__ == "__main__":
    main()
