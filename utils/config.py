# utils/config.py

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# ---------------- Minecraft server ----------------
MINE_ROLE = "testing"
MINE_CONTAINER = "mine-mc-1"

DEFAULT_PREFIX = "."


class ConfigError(RuntimeError):
    """Raised when a required environment variable is missing or invalid."""


@dataclass(frozen=True)
class BotConfig:
    token: str
    api_url: str
    command_prefix: str = DEFAULT_PREFIX
    guild_id: Optional[int] = None
    message_content: bool = False
    keep_alive_port: Optional[int] = None
    log_level: str = "INFO"
    mine_role: str = MINE_ROLE
    mine_container: str = MINE_CONTAINER


def _require(env, name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigError(f"missing {name}")
    return value


def _optional_int(env, name: str) -> Optional[int]:
    raw = (env.get(name) or "").strip()
    if not raw:
        return None
    if not raw.isdigit():
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    return int(raw)


def _flag(env, name: str) -> bool:
    return (env.get(name) or "").strip().lower() in ("1", "true", "yes", "on")


def load_config(env=None, dotenv: bool = True) -> BotConfig:
    """
    Build the process-wide config from the environment (and a .env file).
    DISCORD_TOKEN and API_URL are mandatory.
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    return BotConfig(
        token=_require(env, "DISCORD_TOKEN"),
        api_url=_require(env, "API_URL").rstrip("/"),
        command_prefix=(env.get("COMMAND_PREFIX") or DEFAULT_PREFIX).strip() or DEFAULT_PREFIX,
        guild_id=_optional_int(env, "GUILD_ID"),
        message_content=_flag(env, "MESSAGE_CONTENT_INTENT"),
        keep_alive_port=_optional_int(env, "KEEP_ALIVE_PORT"),
        log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
    )
