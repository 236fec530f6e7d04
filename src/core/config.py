"""Runtime configuration, read from environment variables."""

import logging
import os
from dataclasses import dataclass

ENV_PREFIX = "OPAQUE_CHESS_"


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./opaque_chess.db"
    sql_echo: bool = False
    log_level: str = "INFO"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Environment variables override the defaults on Settings."""
    defaults = Settings()
    return Settings(
        database_url=os.getenv(f"{ENV_PREFIX}DATABASE_URL", defaults.database_url),
        sql_echo=_env_flag(os.getenv(f"{ENV_PREFIX}SQL_ECHO", str(defaults.sql_echo))),
        log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper(),
    )


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(level)
